"""
Identity provider backed by the ``auth_accounts`` table.

Accounts carry credentials, the disabled flag and custom claims. Writes are
flushed into the caller's session and commit together with whatever
document writes the caller makes in the same request.
"""
import logging
import re
import secrets
import string

import jwt
from sqlalchemy.orm import Session

from admin_gateway.core.config import (
    ID_TOKEN_EXPIRE,
    MAX_PASSWORD_BYTES,
    MIN_PASSWORD_LENGTH,
)
from admin_gateway.core.security import (
    create_id_token,
    decode_id_token,
    hash_password,
    verify_password,
)
from admin_gateway.db.documents import utcnow
from admin_gateway.models.auth_account import AuthAccount

logger = logging.getLogger(__name__)

_UID_ALPHABET = string.ascii_letters + string.digits
UID_LENGTH = 28

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class IdentityError(Exception):
    code = "auth/internal-error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UserNotFoundError(IdentityError):
    code = "auth/user-not-found"


class EmailAlreadyExistsError(IdentityError):
    code = "auth/email-already-exists"


class InvalidEmailError(IdentityError):
    code = "auth/invalid-email"


class InvalidPasswordError(IdentityError):
    code = "auth/invalid-password"


class InvalidCredentialsError(IdentityError):
    code = "auth/invalid-credential"


class UserDisabledError(IdentityError):
    code = "auth/user-disabled"


class InvalidIdTokenError(IdentityError):
    code = "auth/invalid-id-token"


def _new_uid() -> str:
    return "".join(secrets.choice(_UID_ALPHABET) for _ in range(UID_LENGTH))


class IdentityProvider:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, uid: str) -> AuthAccount:
        account = self.db.get(AuthAccount, uid)
        if account is None:
            raise UserNotFoundError(
                f"There is no user record corresponding to the provided identifier: {uid}"
            )
        return account

    def get_user_by_email(self, email: str) -> AuthAccount:
        account = (
            self.db.query(AuthAccount)
            .filter(AuthAccount.email == email.strip().lower())
            .first()
        )
        if account is None:
            raise UserNotFoundError(
                f"There is no user record corresponding to the provided email: {email}"
            )
        return account

    def create_user(
        self, email: str, password: str, display_name: str | None = None
    ) -> AuthAccount:
        email = email.strip().lower()
        if not EMAIL_RE.match(email):
            raise InvalidEmailError("The email address is improperly formatted.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidPasswordError(
                f"The password must be a string with at least {MIN_PASSWORD_LENGTH} characters."
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise InvalidPasswordError(
                f"The password must be at most {MAX_PASSWORD_BYTES} bytes long."
            )
        existing = self.db.query(AuthAccount).filter(AuthAccount.email == email).first()
        if existing is not None:
            raise EmailAlreadyExistsError(
                "The email address is already in use by another account."
            )

        account = AuthAccount(
            uid=_new_uid(),
            email=email,
            hashed_password=hash_password(password),
            display_name=display_name or None,
            disabled=False,
            custom_claims={},
        )
        self.db.add(account)
        self.db.flush()
        logger.info("identity account created uid=%s", account.uid)
        return account

    def update_user(
        self,
        uid: str,
        *,
        disabled: bool | None = None,
        display_name: str | None = None,
        photo_url: str | None = None,
    ) -> AuthAccount:
        account = self.get_user(uid)
        if disabled is not None:
            account.disabled = disabled
        if display_name is not None:
            account.display_name = display_name
        if photo_url is not None:
            account.photo_url = photo_url
        account.updated_at = utcnow()
        self.db.flush()
        return account

    def set_custom_user_claims(self, uid: str, claims: dict) -> AuthAccount:
        account = self.get_user(uid)
        account.custom_claims = dict(claims)
        account.updated_at = utcnow()
        self.db.flush()
        return account

    def sign_in_with_password(self, email: str, password: str) -> tuple[AuthAccount, str]:
        try:
            account = self.get_user_by_email(email)
        except UserNotFoundError:
            raise InvalidCredentialsError("Invalid email or password")

        if not verify_password(password, account.hashed_password):
            raise InvalidCredentialsError("Invalid email or password")
        if account.disabled:
            raise UserDisabledError("User account is disabled")

        claims = dict(account.custom_claims or {})
        claims.update({"sub": account.uid, "email": account.email})
        return account, create_id_token(claims, expires_delta=ID_TOKEN_EXPIRE)

    def verify_id_token(self, token: str, check_revoked: bool = True) -> dict:
        """
        Decode and verify an id token, returning its claims with ``uid`` set.

        With ``check_revoked`` the account must still exist and be enabled.
        """
        try:
            claims = decode_id_token(token)
        except jwt.PyJWTError as exc:
            raise InvalidIdTokenError(f"Invalid id token: {exc}")

        claims["uid"] = claims["sub"]
        if check_revoked:
            account = self.db.get(AuthAccount, claims["uid"])
            if account is None:
                raise InvalidIdTokenError("Token subject no longer exists")
            if account.disabled:
                raise UserDisabledError("User account is disabled")
        return claims
