from typing import Any, Dict, List, Optional, Union
from fastapi import APIRouter, Body, Depends, Query, status
from pydantic import BaseModel
from pymongo.database import Database
from app.core.database import get_db
from app.api.dependencies import unwrap
from app.services.course_service import course_service
from app.storage.image_host import ImageHost, get_image_host

# No route requires a session token; the catalog is open to any caller
router = APIRouter(prefix="/courses", tags=["courses"])


class CourseCreate(BaseModel):
    # All optional here; the service reports missing fields as a 400
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Union[int, float]] = None
    instructor: Optional[str] = None
    imageBase64: Optional[str] = None


@router.get("", response_model=List[Dict[str, Any]])
def list_courses(
    category: Optional[str] = Query(
        None, description="Only return courses in this category"),
    db: Database = Depends(get_db)
):
    """List courses, optionally filtered by category"""
    return unwrap(course_service.list_courses(db, category))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_course(
    course: CourseCreate,
    db: Database = Depends(get_db),
    image_host: ImageHost = Depends(get_image_host)
):
    """Create a course and host its image"""
    # imageBase64 is not stored; the service swaps it for the hosted URL
    created = unwrap(course_service.create_course(
        db,
        image_host,
        fields=course.model_dump(exclude={"imageBase64"}),
        image_base64=course.imageBase64
    ))
    return {"message": "Course created successfully!", "course": created}


@router.put("/{course_id}")
def update_course(
    course_id: str,
    fields: Dict[str, Any] = Body(...),
    db: Database = Depends(get_db)
):
    """Replace the given fields on a course"""
    # Any JSON object is accepted as-is - there is no validation on update
    unwrap(course_service.update_course(db, course_id, fields))
    return {"message": "Course updated successfully!"}


@router.delete("/{course_id}")
def delete_course(course_id: str, db: Database = Depends(get_db)):
    """Delete a course"""
    unwrap(course_service.delete_course(db, course_id))
    return {"message": "Course deleted successfully!"}
