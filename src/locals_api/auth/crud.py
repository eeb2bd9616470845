import uuid

from sqlmodel import Session

from locals_api.auth.models import User, UserCreate, UserUpdateMe
from locals_api.core.exceptions import (
    InvalidInputError,
    ResourceNotFoundError,
    from_repository_error,
)
from locals_api.core.repository import Repository, RepositoryError
from locals_api.core.security import get_password_hash, verify_password


def _users(session: Session) -> Repository[User]:
    return Repository(session, User, unique_fields=("email",))


def create_user(*, session: Session, user_create: UserCreate) -> User:
    """Create a new user in the database.

    Args:
        session: Database session
        user_create: User creation data

    Returns:
        Created user object

    Raises:
        ResourceExistsError: If the email is already registered
    """
    data = user_create.model_dump(exclude={"password"})
    data["hashed_password"] = get_password_hash(user_create.password)
    try:
        return _users(session).create(data)
    except RepositoryError as e:
        raise from_repository_error(
            e, resource="User", unique_field="email", operation="create"
        ) from e


def update_user_me(*, session: Session, user_id: uuid.UUID, user_in: UserUpdateMe) -> User:
    """Update the caller's own profile.

    Raises:
        InvalidInputError: If the payload sets no fields
        ResourceNotFoundError: If the user no longer exists
        ResourceExistsError: If the new email belongs to another user
    """
    user_data = user_in.model_dump(exclude_unset=True)
    if not user_data:
        raise InvalidInputError("Update payload is required")

    users = _users(session)
    db_user = users.get(user_id)
    if not db_user:
        raise ResourceNotFoundError("User")

    try:
        return users.update(db_user, user_data)
    except RepositoryError as e:
        raise from_repository_error(
            e, resource="User", unique_field="email", operation="update"
        ) from e


def get_user_by_email(*, session: Session, email: str) -> User | None:
    return _users(session).find_one(User.email == email)


def get_user_by_id(*, session: Session, user_id: uuid.UUID) -> User | None:
    return _users(session).get(user_id)


# Dummy hash for timing-safe authentication when user doesn't exist
# This is a valid bcrypt hash that will always fail verification
_DUMMY_HASH = "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.VIiOMjKQBNHxMK"


def authenticate(*, session: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password.

    Always performs one password verification, whether or not the user
    exists, so response time does not reveal registered emails.

    Returns:
        User object if credentials are valid, None otherwise
    """
    db_user = get_user_by_email(session=session, email=email)

    if not db_user:
        verify_password(password, _DUMMY_HASH)
        return None

    if not verify_password(password, db_user.hashed_password):
        return None

    return db_user
