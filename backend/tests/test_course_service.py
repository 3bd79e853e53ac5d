from unittest.mock import patch
import pytest
from pymongo.errors import ServerSelectionTimeoutError
from bson import ObjectId
from app.services.course_service import course_service
from app.services.result import ErrorKind
from conftest import FakeImageHost

COURSE_FIELDS = {
    "title": "Intro to Algebra",
    "description": "Equations and inequalities",
    "category": "math",
    "price": 49,
    "instructor": "Dr. Noether",
}


def _create(db, image_host, **overrides):
    fields = {**COURSE_FIELDS, **overrides}
    return course_service.create_course(db, image_host, fields, "aW1hZ2U=")


def test_create_course_hosts_image_and_stores_record(db, image_host):
    result = _create(db, image_host)

    assert result.ok
    course = result.value
    assert image_host.uploads == ["aW1hZ2U="]
    assert course["image"] == "https://i.ibb.co/fake/1.png"
    assert course["title"] == "Intro to Algebra"
    assert course["price"] == 49
    assert course["createdAt"]

    stored = db["courses"].find_one({"_id": ObjectId(course["_id"])})
    assert stored["image"] == course["image"]
    assert stored["instructor"] == "Dr. Noether"


@pytest.mark.parametrize("missing", ["title", "description", "category", "price", "instructor"])
def test_create_course_missing_field_does_nothing(db, image_host, missing):
    fields = {k: v for k, v in COURSE_FIELDS.items() if k != missing}

    result = course_service.create_course(db, image_host, fields, "aW1hZ2U=")

    assert result.error.kind == ErrorKind.VALIDATION
    assert result.error.message == "All fields are required."
    assert image_host.uploads == []
    assert db["courses"].count_documents({}) == 0


def test_create_course_missing_image_does_nothing(db, image_host):
    result = course_service.create_course(db, image_host, dict(COURSE_FIELDS), None)

    assert result.error.kind == ErrorKind.VALIDATION
    assert image_host.uploads == []
    assert db["courses"].count_documents({}) == 0


def test_create_course_accepts_free_course(db, image_host):
    assert _create(db, image_host, price=0).ok


def test_image_host_failure_is_server_error(db):
    result = _create(db, FakeImageHost(fail=True))

    assert result.error.kind == ErrorKind.SERVER
    assert db["courses"].count_documents({}) == 0


def test_list_courses_with_and_without_category(db, image_host):
    _create(db, image_host, title="Algebra", category="math")
    _create(db, image_host, title="Painting", category="art")

    everything = course_service.list_courses(db).value
    math_only = course_service.list_courses(db, "math").value

    assert [c["title"] for c in everything] == ["Algebra", "Painting"]
    assert [c["title"] for c in math_only] == ["Algebra"]
    assert course_service.list_courses(db, "history").value == []


def test_update_course_replaces_only_given_fields(db, image_host):
    course = _create(db, image_host).value

    result = course_service.update_course(db, course["_id"], {"price": 59, "title": "Algebra I"})

    assert result.ok
    stored = db["courses"].find_one({"_id": ObjectId(course["_id"])})
    assert stored["price"] == 59
    assert stored["title"] == "Algebra I"
    assert stored["description"] == COURSE_FIELDS["description"]


def test_update_unknown_course_succeeds_without_creating(db, image_host):
    _create(db, image_host)
    before = len(course_service.list_courses(db).value)

    result = course_service.update_course(db, str(ObjectId()), {"title": "Ghost"})

    assert result.ok
    assert len(course_service.list_courses(db).value) == before


def test_update_with_malformed_id_is_server_error(db):
    result = course_service.update_course(db, "not-an-object-id", {"title": "x"})

    assert result.error.kind == ErrorKind.SERVER
    assert result.error.message == "Server error"


def test_delete_course_removes_only_target(db, image_host):
    keep = _create(db, image_host, title="Keep").value
    drop = _create(db, image_host, title="Drop").value

    assert course_service.delete_course(db, drop["_id"]).ok
    # Second delete of the same id is a no-op, not an error
    assert course_service.delete_course(db, drop["_id"]).ok

    remaining = course_service.list_courses(db).value
    assert [c["_id"] for c in remaining] == [keep["_id"]]


def test_delete_with_malformed_id_is_server_error(db):
    assert course_service.delete_course(db, "123").error.kind == ErrorKind.SERVER


class UnreachableCollection:
    """Fails every operation the way pymongo does when no server answers"""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ServerSelectionTimeoutError("No servers available")
        return fail


class UnreachableDatabase:
    def __getitem__(self, name):
        return UnreachableCollection()


@pytest.mark.parametrize("call", [
    lambda db: course_service.list_courses(db),
    lambda db: course_service.list_courses(db, "math"),
    lambda db: course_service.update_course(db, str(ObjectId()), {"title": "x"}),
    lambda db: course_service.delete_course(db, str(ObjectId())),
])
def test_course_operations_fail_closed_when_store_is_down(call):
    result = call(UnreachableDatabase())

    assert result.error.kind == ErrorKind.SERVER
    assert result.error.message == "Server error"


def test_insert_failure_after_upload_leaves_hosted_image(db, image_host):
    with patch("mongomock.collection.Collection.insert_one",
               side_effect=ServerSelectionTimeoutError("No servers available")):
        result = _create(db, image_host)

    assert result.error.kind == ErrorKind.SERVER
    assert result.error.message == "Server error"
    # The upload already happened and is not rolled back
    assert image_host.uploads == ["aW1hZ2U="]
    assert db["courses"].count_documents({}) == 0
