from slowapi import Limiter
from slowapi.util import get_remote_address

from localization.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["300/minute"] if settings.ENVIRONMENT != "local" else [],
    enabled=settings.ENVIRONMENT != "local",
)

BUNDLE_RATE_LIMIT = "300/minute"

WRITE_RATE_LIMIT = "60/minute"

PUBLISH_RATE_LIMIT = "10/minute"
