"""Authentication routes package.

- login: Sign-in and token issuing
- signup: User registration
"""

from fastapi import APIRouter

from locals_api.api.routes.auth import login, signup

router = APIRouter(prefix="/auth", tags=["auth"])

router.include_router(signup.router)
router.include_router(login.router)
