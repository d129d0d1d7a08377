from datetime import datetime

from sqlalchemy import DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from admin_gateway.db.base_class import Base
from admin_gateway.db.documents import new_document_id, utcnow

ENROLLMENT_SUCCESS = "SUCCESS"
ENROLLMENT_PENDING = "PENDING"
ENROLLMENT_FAILED = "FAILED"


class Enrollment(Base):
    __tablename__ = "enrollments"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_document_id)
    enrollment_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)

    # plain document references (no FKs): deleting a course leaves
    # its enrollments in place
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    course_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    course_title: Mapped[str] = mapped_column(String(255), nullable=False, default="Course")
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ENROLLMENT_SUCCESS, index=True
    )
    paid_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    enrolled_by: Mapped[str] = mapped_column(String(255), nullable=False, default="admin")
    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # paymentDetails sub-object, flattened
    payment_id: Mapped[str] = mapped_column(String(128), nullable=False)
    payment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    payment_method: Mapped[str] = mapped_column(String(32), nullable=False, default="offline")
    payment_reference: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    amount_paid: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    @property
    def payment_details(self) -> dict:
        return {
            "payment_id": self.payment_id,
            "payment_date": self.payment_date,
            "method": self.payment_method,
            "reference": self.payment_reference,
            "amount_paid": self.amount_paid,
        }
