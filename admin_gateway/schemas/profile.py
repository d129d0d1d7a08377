from typing import Any

from pydantic import Field

from admin_gateway.schemas.base import CamelModel


class ProfileUpdate(CamelModel):
    """Whitelisted self-service fields; anything else in the body is dropped."""

    display_name: str | None = None
    phone: str | None = None
    photo_url: str | None = Field(default=None, alias="photoURL")
    bio: str | None = None
    address: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    college: str | None = None
    gender: str | None = None
    date_of_birth: str | None = None
    # shape checked by the route so the error names the field
    skills: Any = None
    social_links: Any = None
