from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def issue_rate_limit() -> str:
    """Rate limit for endpoints that wipe the store and issue new tickets."""
    return get_settings().issue_rate_limit
