import logging

from fastapi import APIRouter, Depends, HTTPException, status

from admin_gateway.core.config import ID_TOKEN_EXPIRE
from admin_gateway.core.deps import get_identity
from admin_gateway.core.identity import (
    IdentityProvider,
    InvalidCredentialsError,
    UserDisabledError,
)
from admin_gateway.schemas.auth import IdToken, LoginRequest
from admin_gateway.schemas.envelope import Envelope

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=Envelope[IdToken],
    response_model_exclude_none=True,
    responses={
        401: {"description": "Invalid email or password, or account disabled"},
    },
)
def login(payload: LoginRequest, identity: IdentityProvider = Depends(get_identity)):
    try:
        account, token = identity.sign_in_with_password(payload.email, payload.password)
    except (InvalidCredentialsError, UserDisabledError) as exc:
        logger.info("sign-in refused for %s: %s", payload.email, exc.code)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=exc.message)

    return {
        "success": True,
        "data": {
            "id_token": token,
            "uid": account.uid,
            "expires_in": int(ID_TOKEN_EXPIRE.total_seconds()),
        },
    }
