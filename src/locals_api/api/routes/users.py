from typing import Any

from fastapi import APIRouter

from locals_api.auth import (
    CurrentUser,
    SessionDep,
    UserPublic,
    UserUpdateMe,
    update_user_me,
)
from locals_api.core.base_models import Envelope
from locals_api.core.logging import get_logger

router = APIRouter(prefix="/users", tags=["users"])
logger = get_logger(__name__)


@router.get("/me", response_model=Envelope[UserPublic])
def read_user_me(current_user: CurrentUser) -> Any:
    """Get the caller's profile."""
    return Envelope(data=UserPublic.model_validate(current_user))


@router.put("/update", response_model=Envelope[UserPublic])
def update_me(
    session: SessionDep,
    current_user: CurrentUser,
    user_in: UserUpdateMe,
) -> Any:
    """Update the caller's profile (email, first and last name)."""
    user = update_user_me(session=session, user_id=current_user.id, user_in=user_in)
    logger.info(
        "user_profile_updated",
        user_id=str(user.id),
        fields=sorted(user_in.model_dump(exclude_unset=True)),
    )
    return Envelope(data=UserPublic.model_validate(user))
