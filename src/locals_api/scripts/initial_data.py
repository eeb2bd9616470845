"""Script to create initial data (the first admin account)."""

import logging

from sqlmodel import Session

from locals_api.auth import UserCreate, UserRole, create_user, get_user_by_email
from locals_api.core.config import settings
from locals_api.core.db import engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init(session: Session) -> None:
    """Create the first admin if no account uses its email yet."""
    user = get_user_by_email(session=session, email=settings.FIRST_SUPERUSER_EMAIL)
    if user:
        logger.info(f"Admin already exists: {user.email}")
        return

    user_in = UserCreate(
        email=settings.FIRST_SUPERUSER_EMAIL,
        password=settings.FIRST_SUPERUSER_PASSWORD,
        role=UserRole.ADMIN,
    )
    user = create_user(session=session, user_create=user_in)
    logger.info(f"Created admin: {user.email}")


def main() -> None:
    logger.info("Creating initial data")
    with Session(engine) as session:
        init(session)
    logger.info("Initial data created")


if __name__ == "__main__":
    main()
