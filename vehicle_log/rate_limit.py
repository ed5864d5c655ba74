"""Rate limiting global / Global rate limiter.

Utilise slowapi pour limiter les requetes par IP.
Limits requests per client IP; applied to every route by SlowAPIMiddleware.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from vehicle_log.config import RateLimitSettings, settings


def build_limiter(rate_limit: RateLimitSettings) -> Limiter:
    """Limiteur par IP depuis la config / Per-IP limiter from the settings."""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[rate_limit.default],
        enabled=rate_limit.enabled,
    )


limiter = build_limiter(settings.rate_limit)
