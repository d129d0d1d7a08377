from datetime import datetime
from typing import Literal

from pydantic import Field

from admin_gateway.schemas.base import CamelModel


class ToggleUserRequest(CamelModel):
    uid: str = Field(min_length=1)
    action: Literal["enable", "disable"]


class CreateUserRequest(CamelModel):
    # raw address; the identity provider validates and normalizes it
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    display_name: str | None = None
    phone: str | None = None
    role: str | None = None

    @property
    def wants_admin(self) -> bool:
        return (self.role or "").lower() == "admin"


class Credentials(CamelModel):
    email: str
    password: str


class CreatedUser(CamelModel):
    uid: str
    email: str
    credentials: Credentials


class UserRead(CamelModel):
    uid: str
    email: str
    display_name: str = ""
    phone: str = ""
    photo_url: str | None = Field(default=None, alias="photoURL")
    is_admin: bool
    status: str
    total_courses_enrolled: int

    first_name: str | None = None
    last_name: str | None = None
    college: str | None = None
    gender: str | None = None
    date_of_birth: str | None = None
    bio: str | None = None
    address: str | None = None
    skills: list | None = None
    social_links: dict | None = None

    created_at: datetime
    updated_at: datetime
