import logging

from fastapi import Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from admin_gateway.core.current_user import get_current_claims
from admin_gateway.core.deps import get_db
from admin_gateway.models.user import User

logger = logging.getLogger(__name__)


def require_admin(
    claims: dict = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> User:
    uid = claims["uid"]
    try:
        user = db.get(User, uid)
    except SQLAlchemyError:
        logger.exception("admin lookup failed for uid=%s", uid)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to verify admin status",
        )

    if user is None or not user.is_admin:
        logger.warning("admin access denied for uid=%s", uid)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
