"""User registration route."""

from typing import Any

from fastapi import APIRouter, Request, status

from locals_api.auth import (
    SessionDep,
    SignupRequest,
    UserCreate,
    UserPublic,
    UserRole,
    create_user,
    get_user_by_email,
)
from locals_api.core.base_models import Envelope
from locals_api.core.config import settings
from locals_api.core.exceptions import ResourceExistsError
from locals_api.core.logging import get_logger
from locals_api.core.rate_limit import SIGNUP_RATE_LIMIT, limiter

router = APIRouter()
logger = get_logger(__name__)


@router.post(
    "/signup",
    response_model=Envelope[UserPublic],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(SIGNUP_RATE_LIMIT)
def register_user(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    user_in: SignupRequest,
) -> Any:
    """Create a new account.

    New accounts get the ``user`` role unless ALLOW_SIGNUP_ROLE lets the
    request pick one.
    """
    if get_user_by_email(session=session, email=user_in.email):
        raise ResourceExistsError("User", "email")

    role = UserRole.USER
    if settings.ALLOW_SIGNUP_ROLE and user_in.role is not None:
        role = user_in.role

    user_create = UserCreate.model_validate(
        user_in.model_dump(exclude={"role"}), update={"role": role}
    )
    user = create_user(session=session, user_create=user_create)
    logger.info("user_registered", user_id=str(user.id), role=user.role.value)

    return Envelope(data=UserPublic.model_validate(user))
