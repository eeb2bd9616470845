from slowapi import Limiter
from slowapi.util import get_remote_address

from locals_api.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["100/minute"] if settings.ENVIRONMENT != "local" else [],
    enabled=settings.ENVIRONMENT != "local",
)

SIGNIN_RATE_LIMIT = "5/minute"

SIGNUP_RATE_LIMIT = "10/hour"
