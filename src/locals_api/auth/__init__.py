from locals_api.auth.crud import (
    authenticate,
    create_user,
    get_user_by_email,
    get_user_by_id,
    update_user_me,
)
from locals_api.auth.deps import (
    AdminUser,
    CurrentUser,
    Principal,
    PrincipalDep,
    SessionDep,
    get_admin_user,
    get_current_principal,
    get_current_user,
)
from locals_api.auth.models import (
    SigninRequest,
    SigninResponse,
    SignupRequest,
    TokenPayload,
    User,
    UserCreate,
    UserPublic,
    UserRole,
    UserUpdateMe,
)

__all__ = [
    # Dependencies
    "AdminUser",
    "CurrentUser",
    "Principal",
    "PrincipalDep",
    "SessionDep",
    "get_admin_user",
    "get_current_principal",
    "get_current_user",
    # Models
    "SigninRequest",
    "SigninResponse",
    "SignupRequest",
    "TokenPayload",
    "User",
    "UserCreate",
    "UserPublic",
    "UserRole",
    "UserUpdateMe",
    # CRUD
    "authenticate",
    "create_user",
    "get_user_by_email",
    "get_user_by_id",
    "update_user_me",
]
