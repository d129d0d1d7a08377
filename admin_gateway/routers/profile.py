import re
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from admin_gateway.core.current_user import get_current_claims
from admin_gateway.core.deps import get_db, get_identity
from admin_gateway.core.identity import IdentityProvider
from admin_gateway.db.documents import update_document
from admin_gateway.models.user import User
from admin_gateway.schemas.envelope import Envelope
from admin_gateway.schemas.profile import ProfileUpdate
from admin_gateway.schemas.user import UserRead

router = APIRouter()

PHONE_RE = re.compile(r"^\+?[0-9\-()\s]{7,20}$")
MAX_BIO_LENGTH = 1000
MAX_ADDRESS_LENGTH = 500


def _profile_errors(values: dict) -> list[str]:
    errors = []
    display_name = values.get("display_name")
    if display_name and len(display_name.strip()) < 3:
        errors.append("Display name must be at least 3 characters")
    phone = values.get("phone")
    if phone and not PHONE_RE.match(phone):
        errors.append("Invalid phone number format")
    photo_url = values.get("photo_url")
    if photo_url:
        parsed = urlparse(photo_url)
        if not (parsed.scheme and parsed.netloc):
            errors.append("Invalid photoURL")
    if values.get("bio") and len(values["bio"]) > MAX_BIO_LENGTH:
        errors.append(f"Bio is too long (max {MAX_BIO_LENGTH} characters)")
    if values.get("address") and len(values["address"]) > MAX_ADDRESS_LENGTH:
        errors.append(f"Address is too long (max {MAX_ADDRESS_LENGTH} characters)")
    if "skills" in values and not isinstance(values["skills"], list):
        errors.append("Skills must be an array")
    if "social_links" in values and not isinstance(values["social_links"], dict):
        errors.append("Social links must be an object")
    return errors


@router.get("", response_model=Envelope[UserRead], response_model_exclude_none=True)
def get_profile(
    claims: dict = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    user = db.get(User, claims["uid"])
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User profile not found")
    return {"success": True, "data": user}


@router.put("", response_model=Envelope[UserRead], response_model_exclude_none=True)
def update_profile(
    payload: ProfileUpdate,
    claims: dict = Depends(get_current_claims),
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity),
):
    uid = claims["uid"]
    values = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not values:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid fields provided to update",
        )

    errors = _profile_errors(values)
    if errors:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="; ".join(errors))

    try:
        update_document(db, User, uid, **values)
        if values.get("display_name") or values.get("photo_url"):
            identity.update_user(
                uid,
                display_name=values.get("display_name") or None,
                photo_url=values.get("photo_url") or None,
            )
        db.commit()
    except Exception:
        db.rollback()
        raise

    user = db.get(User, uid)
    return {"success": True, "data": user}
