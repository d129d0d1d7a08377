import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from admin_gateway.core.deps import get_db
from admin_gateway.core.permissions import require_admin
from admin_gateway.db.documents import update_document
from admin_gateway.models.course import COURSE_DRAFT, Course
from admin_gateway.models.user import User
from admin_gateway.schemas.course import CourseCreate, CourseRead, CourseUpdate, CreatedCourse
from admin_gateway.schemas.envelope import Envelope

logger = logging.getLogger(__name__)

router = APIRouter()

MIN_TITLE_LENGTH = 3


def _ensure_course_exists(db: Session, course_id: str) -> Course:
    course = db.get(Course, course_id)
    if not course:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return course


@router.get(
    "/courses",
    response_model=Envelope[list[CourseRead]],
    response_model_exclude_none=True,
)
def list_courses(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    courses = db.query(Course).order_by(Course.created_at.desc()).all()
    return {"success": True, "data": courses}


@router.get(
    "/courses/{course_id}",
    response_model=Envelope[CourseRead],
    response_model_exclude_none=True,
)
def get_course(
    course_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return {"success": True, "data": _ensure_course_exists(db, course_id)}


@router.post(
    "/courses",
    response_model=Envelope[CreatedCourse],
    response_model_exclude_none=True,
)
def create_course(
    payload: CourseCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    title = (payload.title or "").strip()
    if len(title) < MIN_TITLE_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Title is required (min {MIN_TITLE_LENGTH} chars)",
        )

    # counters, publication state and authorship are always server-assigned
    course = Course(
        **payload.model_dump(exclude={"title"}, exclude_none=True),
        title=title,
        created_by=admin.uid,
        total_enrollments=0,
        average_rating=0,
        total_ratings=0,
        is_published=False,
        status=COURSE_DRAFT,
    )
    try:
        db.add(course)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(course)
    logger.info("course %s created by %s", course.id, admin.uid)
    return {"success": True, "data": {"id": course.id}}


@router.put(
    "/courses/{course_id}",
    response_model=Envelope[None],
    response_model_exclude_none=True,
)
def update_course(
    course_id: str,
    payload: CourseUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    values = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "title" in values:
        title = values["title"].strip()
        if len(title) < MIN_TITLE_LENGTH:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid title")
        values["title"] = title

    try:
        update_document(db, Course, course_id, **values)
        db.commit()
    except Exception:
        db.rollback()
        raise

    return {"success": True}


@router.delete(
    "/courses/{course_id}",
    response_model=Envelope[None],
    response_model_exclude_none=True,
)
def delete_course(
    course_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    # deleting an absent course is a no-op; enrollments are left untouched
    try:
        db.query(Course).filter(Course.id == course_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("course %s deleted by %s", course_id, admin.uid)
    return {"success": True}
