from datetime import datetime
from typing import Literal

from pydantic import Field, model_validator

from admin_gateway.schemas.base import CamelModel

EnrollmentStatus = Literal["SUCCESS", "PENDING", "FAILED"]

# never writable after creation, under either spelling
IMMUTABLE_ENROLLMENT_FIELDS = (
    "id",
    "enrollmentId",
    "enrollment_id",
    "userId",
    "user_id",
    "courseId",
    "course_id",
    "enrolledAt",
    "enrolled_at",
    "createdAt",
    "created_at",
)


class PaymentData(CamelModel):
    payment_id: str | None = None
    method: str | None = None
    reference: str | None = None
    amount_paid: float | None = None


class CreateEnrollmentRequest(CamelModel):
    user_id: str = Field(min_length=1)
    course_id: str = Field(min_length=1)
    course_title: str | None = None
    course_price: float | None = None
    payment_data: PaymentData | None = None
    enrolled_by: str | None = None


class PaymentDetails(CamelModel):
    payment_id: str
    payment_date: datetime
    method: str
    reference: str
    amount_paid: float


class PaymentDetailsUpdate(CamelModel):
    payment_id: str | None = None
    payment_date: datetime | None = None
    method: str | None = None
    reference: str | None = None
    amount_paid: float | None = None


class EnrollmentUpdate(CamelModel):
    status: EnrollmentStatus | None = None
    course_title: str | None = None
    paid_amount: float | None = None
    enrolled_by: str | None = None
    payment_details: PaymentDetailsUpdate | None = None

    @model_validator(mode="before")
    @classmethod
    def strip_immutable(cls, data):
        if isinstance(data, dict):
            data = {k: v for k, v in data.items() if k not in IMMUTABLE_ENROLLMENT_FIELDS}
        return data


class EnrollmentRead(CamelModel):
    id: str
    enrollment_id: str
    user_id: str
    course_id: str
    course_title: str
    status: str
    paid_amount: float
    enrolled_at: datetime
    enrolled_by: str
    payment_details: PaymentDetails
    created_at: datetime
    updated_at: datetime
