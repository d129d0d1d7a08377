from pydantic import Field

from admin_gateway.schemas.base import CamelModel


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str


class IdToken(CamelModel):
    id_token: str
    uid: str
    expires_in: int
