import logging
import secrets
import string

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from admin_gateway.core.config import ADMIN_PAYMENT_ID_PREFIX, ENROLLMENT_ID_PREFIX
from admin_gateway.core.deps import get_db
from admin_gateway.core.permissions import require_admin
from admin_gateway.db.documents import increment, update_document, utcnow
from admin_gateway.models.course import Course
from admin_gateway.models.enrollment import ENROLLMENT_SUCCESS, Enrollment
from admin_gateway.models.user import User
from admin_gateway.schemas.envelope import Envelope
from admin_gateway.schemas.enrollment import (
    CreateEnrollmentRequest,
    EnrollmentRead,
    EnrollmentStatus,
    EnrollmentUpdate,
    PaymentData,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_BASE36 = string.digits + string.ascii_lowercase

# PaymentDetailsUpdate field -> Enrollment column
_PAYMENT_COLUMNS = {
    "payment_id": "payment_id",
    "payment_date": "payment_date",
    "method": "payment_method",
    "reference": "payment_reference",
    "amount_paid": "amount_paid",
}


def _new_enrollment_id(epoch_ms: int) -> str:
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"{ENROLLMENT_ID_PREFIX}{epoch_ms}_{suffix}"


def _adjust_counters(
    db: Session, user_id: str, course_id: str, delta: int, missing_ok: bool = False
) -> None:
    if not increment(db, Course, course_id, "total_enrollments", delta, missing_ok):
        logger.warning("course %s missing, totalEnrollments not adjusted", course_id)
    if not increment(db, User, user_id, "total_courses_enrolled", delta, missing_ok):
        logger.warning("user %s missing, totalCoursesEnrolled not adjusted", user_id)


@router.post(
    "/createEnrollment",
    response_model=Envelope[EnrollmentRead],
    response_model_exclude_none=True,
)
def create_enrollment(
    payload: CreateEnrollmentRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    now = utcnow()
    epoch_ms = int(now.timestamp() * 1000)
    payment = payload.payment_data or PaymentData()
    price = payload.course_price if payload.course_price is not None else 0

    enrollment = Enrollment(
        enrollment_id=_new_enrollment_id(epoch_ms),
        user_id=payload.user_id,
        course_id=payload.course_id,
        course_title=payload.course_title or "Course",
        status=ENROLLMENT_SUCCESS,
        paid_amount=price,
        enrolled_at=now,
        enrolled_by=payload.enrolled_by or "admin",
        payment_id=payment.payment_id or f"{ADMIN_PAYMENT_ID_PREFIX}{epoch_ms}",
        payment_date=now,
        payment_method=payment.method or "offline",
        payment_reference=payment.reference or "",
        amount_paid=payment.amount_paid if payment.amount_paid is not None else price,
        created_at=now,
        updated_at=now,
    )

    # enrollment row and both counters commit together or not at all
    try:
        db.add(enrollment)
        db.flush()
        _adjust_counters(db, payload.user_id, payload.course_id, 1)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(enrollment)
    logger.info(
        "enrollment %s created: user=%s course=%s by=%s",
        enrollment.id,
        enrollment.user_id,
        enrollment.course_id,
        admin.uid,
    )
    return {"success": True, "data": enrollment}


@router.get(
    "/enrollments/{user_id}",
    response_model=Envelope[list[EnrollmentRead]],
    response_model_exclude_none=True,
)
def list_user_enrollments(
    user_id: str,
    status_filter: EnrollmentStatus = Query(ENROLLMENT_SUCCESS, alias="status"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    enrollments = (
        db.query(Enrollment)
        .filter(Enrollment.user_id == user_id, Enrollment.status == status_filter)
        .order_by(Enrollment.enrolled_at.desc())
        .all()
    )
    return {"success": True, "data": enrollments}


@router.put(
    "/enrollments/{enrollment_id}",
    response_model=Envelope[None],
    response_model_exclude_none=True,
)
def update_enrollment(
    enrollment_id: str,
    payload: EnrollmentUpdate | None = None,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    payload = payload or EnrollmentUpdate()
    values = payload.model_dump(
        exclude_unset=True, exclude_none=True, exclude={"payment_details"}
    )
    if payload.payment_details is not None:
        details = payload.payment_details.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in details.items():
            values[_PAYMENT_COLUMNS[field]] = value

    # no existence pre-check: an unknown id surfaces as DocumentNotFound
    try:
        update_document(db, Enrollment, enrollment_id, **values)
        db.commit()
    except Exception:
        db.rollback()
        raise

    return {"success": True}


@router.delete(
    "/enrollments/{enrollment_id}",
    response_model=Envelope[None],
    response_model_exclude_none=True,
)
def delete_enrollment(
    enrollment_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    enrollment = db.get(Enrollment, enrollment_id)
    if not enrollment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enrollment not found")

    user_id, course_id = enrollment.user_id, enrollment.course_id
    try:
        db.delete(enrollment)
        db.flush()
        # a course or user deleted since enrollment has no counter left to fix
        _adjust_counters(db, user_id, course_id, -1, missing_ok=True)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("enrollment %s deleted by %s", enrollment_id, admin.uid)
    return {"success": True}
