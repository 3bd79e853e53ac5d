from datetime import datetime, timezone
from typing import Any, Dict

# Fields a caller must supply to create a course (the image is uploaded
# separately and replaced by its hosted URL)
REQUIRED_COURSE_FIELDS = ("title", "description", "category", "price", "instructor")


def new_course_document(fields: Dict[str, Any], image_url: str) -> Dict[str, Any]:
    """Build a course document for the `courses` collection"""
    return {
        "title": fields["title"],
        "description": fields["description"],
        "category": fields["category"],
        "price": fields["price"],
        "instructor": fields["instructor"],
        "image": image_url,
        # Set by the server at creation time, never by the caller
        "createdAt": datetime.now(timezone.utc),
    }


def serialize_course(document: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a stored course into a JSON-friendly dict"""
    course = dict(document)
    if "_id" in course:
        course["_id"] = str(course["_id"])
    created_at = course.get("createdAt")
    if isinstance(created_at, datetime):
        course["createdAt"] = created_at.isoformat()
    return course
