import logging
from typing import Any, Dict, List, Optional
from bson import ObjectId
from pymongo.database import Database
from app.core.database import COURSES_COLLECTION
from app.models.course import REQUIRED_COURSE_FIELDS, new_course_document, serialize_course
from app.services.result import ErrorKind, ServiceResult
from app.storage.image_host import ImageHost

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "All fields are required."


def _is_missing(value: Any) -> bool:
    # Zero is a legitimate price, so only None and blank strings count
    return value is None or (isinstance(value, str) and not value.strip())


class CourseService:
    @staticmethod
    def list_courses(
        db: Database,
        category: Optional[str] = None
    ) -> ServiceResult[List[Dict[str, Any]]]:
        """List all courses, or only those whose category equals the filter"""
        try:
            query = {"category": category} if category else {}
            courses = [serialize_course(doc) for doc in db[COURSES_COLLECTION].find(query)]
            return ServiceResult.success(courses)
        except Exception:
            logger.exception("Listing courses failed")
            return ServiceResult.server_error()

    @staticmethod
    def create_course(
        db: Database,
        image_host: ImageHost,
        fields: Dict[str, Any],
        image_base64: Optional[str]
    ) -> ServiceResult[Dict[str, Any]]:
        """
        Create a course after hosting its image.

        Validation happens before any side effect: a missing field means no
        upload and no insert. If the insert fails after a successful upload
        the hosted image is left behind.
        """
        try:
            missing = [name for name in REQUIRED_COURSE_FIELDS if _is_missing(fields.get(name))]
            if missing or _is_missing(image_base64):
                return ServiceResult.failure(ErrorKind.VALIDATION, MISSING_FIELDS_MESSAGE)

            image_url = image_host.host_image(image_base64)

            course = new_course_document(fields, image_url)
            result = db[COURSES_COLLECTION].insert_one(course)
            course["_id"] = result.inserted_id
            logger.info(f"Created course {result.inserted_id} ({course['title']})")

            return ServiceResult.success(serialize_course(course))
        except Exception:
            logger.exception("Creating course failed")
            return ServiceResult.server_error()

    @staticmethod
    def update_course(
        db: Database,
        course_id: str,
        fields: Dict[str, Any]
    ) -> ServiceResult[None]:
        """
        Replace exactly the given fields on a course.

        An unknown id matches nothing and still counts as success; a malformed
        id fails while parsing, before the store is touched.
        """
        try:
            result = db[COURSES_COLLECTION].update_one(
                {"_id": ObjectId(course_id)},
                {"$set": fields}
            )
            logger.info(f"Updated course {course_id} (matched {result.matched_count})")
            return ServiceResult.success()
        except Exception:
            logger.exception(f"Updating course {course_id} failed")
            return ServiceResult.server_error()

    @staticmethod
    def delete_course(db: Database, course_id: str) -> ServiceResult[None]:
        """Delete a course; deleting an unknown id is a no-op"""
        try:
            result = db[COURSES_COLLECTION].delete_one({"_id": ObjectId(course_id)})
            logger.info(f"Deleted course {course_id} (removed {result.deleted_count})")
            return ServiceResult.success()
        except Exception:
            logger.exception(f"Deleting course {course_id} failed")
            return ServiceResult.server_error()


course_service = CourseService()
