from dataclasses import dataclass
from typing import Annotated
import uuid

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt
from pydantic import ValidationError
from sqlmodel import Session

from locals_api.auth.crud import get_user_by_id
from locals_api.auth.models import TokenPayload, User, UserRole
from locals_api.core.db import get_db
from locals_api.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ResourceNotFoundError,
)
from locals_api.core.logging import get_logger
from locals_api.core.security import decode_token

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[
    HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
]


@dataclass(frozen=True)
class Principal:
    """Identity carried by a verified access token."""

    id: uuid.UUID
    # Role at issue time; authorization reads the stored user instead
    role: str | None


def get_current_principal(credentials: CredentialsDep) -> Principal:
    """Decode the bearer token into a Principal.

    Raises:
        AuthenticationError: If the token is missing, expired or malformed
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
        token_data = TokenPayload(**payload)
        if token_data.sub is None:
            raise AuthenticationError("Could not validate credentials")
        user_id = uuid.UUID(token_data.sub)
    except (jwt.InvalidTokenError, ValidationError, ValueError) as e:
        logger.info("invalid_access_token", error_type=type(e).__name__)
        raise AuthenticationError("Could not validate credentials") from e

    return Principal(id=user_id, role=token_data.per)


PrincipalDep = Annotated[Principal, Depends(get_current_principal)]


def get_current_user(session: SessionDep, principal: PrincipalDep) -> User:
    """Get the authenticated user behind the bearer token.

    Raises:
        AuthenticationError: If the token's user no longer exists
    """
    user = get_user_by_id(session=session, user_id=principal.id)
    if not user:
        raise AuthenticationError("User not found")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_admin_user(session: SessionDep, principal: PrincipalDep) -> User:
    """Resolve the principal to a user and require the admin role.

    The role is read from the stored user, not the token, so a demotion takes
    effect before the token expires.

    Raises:
        ResourceNotFoundError: If the principal does not resolve to a user
        AuthorizationError: If the user is not an admin
    """
    user = get_user_by_id(session=session, user_id=principal.id)
    if not user:
        raise ResourceNotFoundError("User")
    if user.role != UserRole.ADMIN:
        logger.info(
            "admin_access_denied",
            user_id=str(user.id),
            role=user.role.value,
            token_role=principal.role,
        )
        raise AuthorizationError("Access denied! Admin role required")
    return user


AdminUser = Annotated[User, Depends(get_admin_user)]
