import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from admin_gateway.core.config import DEFAULT_USERS_PAGE_SIZE, MAX_USERS_PAGE_SIZE
from admin_gateway.core.deps import get_db, get_identity
from admin_gateway.core.identity import IdentityProvider
from admin_gateway.core.permissions import require_admin
from admin_gateway.db.documents import update_document
from admin_gateway.models.user import USER_ACTIVE, USER_INACTIVE, User
from admin_gateway.schemas.envelope import Envelope
from admin_gateway.schemas.user import (
    CreatedUser,
    CreateUserRequest,
    ToggleUserRequest,
    UserRead,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/toggleUser",
    response_model=Envelope[None],
    response_model_exclude_none=True,
)
def toggle_user(
    payload: ToggleUserRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity),
):
    disabled = payload.action == "disable"

    try:
        identity.update_user(payload.uid, disabled=disabled)
        update_document(
            db,
            User,
            payload.uid,
            status=USER_INACTIVE if disabled else USER_ACTIVE,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("user %s %sd by %s", payload.uid, payload.action, admin.uid)
    return {"success": True}


@router.post(
    "/createUser",
    response_model=Envelope[CreatedUser],
    response_model_exclude_none=True,
)
def create_user(
    payload: CreateUserRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity),
):
    try:
        account = identity.create_user(
            email=payload.email,
            password=payload.password,
            display_name=payload.display_name,
        )
        user = User(
            uid=account.uid,
            email=account.email,
            display_name=payload.display_name or "",
            phone=payload.phone or "",
            is_admin=payload.wants_admin,
            status=USER_ACTIVE,
            total_courses_enrolled=0,
        )
        db.add(user)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("user %s created by %s (admin=%s)", account.uid, admin.uid, payload.wants_admin)
    return {
        "success": True,
        "data": {
            "uid": account.uid,
            "email": account.email,
            "credentials": {"email": payload.email, "password": payload.password},
        },
    }


@router.get(
    "/users",
    response_model=Envelope[list[UserRead]],
    response_model_exclude_none=True,
)
def list_users(
    limit: int = Query(DEFAULT_USERS_PAGE_SIZE, ge=1, le=MAX_USERS_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    users = (
        db.query(User)
        .order_by(User.created_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return {"success": True, "data": users}
