from datetime import datetime
from typing import Literal

from admin_gateway.schemas.base import CamelModel

CourseStatus = Literal["draft", "published", "archived"]


class CourseFields(CamelModel):
    description: str | None = None
    short_description: str | None = None
    instructor: str | None = None
    price: float | None = None
    original_price: float | None = None
    currency: str | None = None
    duration: float | None = None
    difficulty: str | None = None
    language: str | None = None
    category: str | None = None
    thumbnail: str | None = None
    tags: list[str] | None = None


class CourseCreate(CourseFields):
    # checked by the route so a missing title gets the same message as a short one
    title: str | None = None
    is_featured: bool = False


class CourseUpdate(CourseFields):
    """
    Partial update. Identity, authorship and derived counters (id, courseId,
    createdAt, createdBy, totalEnrollments, averageRating, totalRatings) are
    not fields here, so they are dropped from incoming bodies.
    """

    title: str | None = None
    is_featured: bool | None = None
    is_published: bool | None = None
    status: CourseStatus | None = None


class CourseRead(CamelModel):
    course_id: str
    title: str
    description: str | None = None
    short_description: str | None = None
    instructor: str | None = None
    price: float
    original_price: float | None = None
    currency: str
    duration: float | None = None
    difficulty: str | None = None
    language: str | None = None
    category: str | None = None
    thumbnail: str | None = None
    tags: list[str] | None = None
    total_enrollments: int
    average_rating: float
    total_ratings: int
    is_published: bool
    is_featured: bool
    status: str
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


class CreatedCourse(CamelModel):
    id: str
