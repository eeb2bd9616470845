"""Sign-in route."""

from fastapi import APIRouter, Request

from locals_api.auth import (
    SessionDep,
    SigninRequest,
    SigninResponse,
    UserPublic,
    authenticate,
)
from locals_api.core.config import settings
from locals_api.core.exceptions import AuthenticationError
from locals_api.core.logging import get_logger
from locals_api.core.rate_limit import SIGNIN_RATE_LIMIT, limiter
from locals_api.core.security import create_access_token

router = APIRouter()
logger = get_logger(__name__)


@router.post("/signin", response_model=SigninResponse)
@limiter.limit(SIGNIN_RATE_LIMIT)
def signin(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    credentials: SigninRequest,
) -> SigninResponse:
    """Exchange email and password for a bearer access token.

    Unknown emails and wrong passwords get the same answer. Rate limited to
    slow down brute force attempts.
    """
    user = authenticate(
        session=session, email=credentials.email, password=credentials.password
    )
    if not user:
        logger.info("signin_failed", email=credentials.email)
        raise AuthenticationError("Invalid credentials")

    access_token, _expires_at = create_access_token(
        user.id, email=user.email, role=user.role.value
    )
    logger.info("user_signin", user_id=str(user.id))

    return SigninResponse(
        access_token=access_token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        data=UserPublic.model_validate(user),
    )
