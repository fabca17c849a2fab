"""Per-client rate limits, keyed by remote address."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from employee_api.config import get_settings

_settings = get_settings()


def api_default_limit() -> str:
    """Read endpoint limit, resolved on every request from settings."""
    return f"{get_settings().rate_limit_default}/minute"


API_DEFAULT_LIMIT = api_default_limit
# Applied to create, update and delete endpoints
WRITE_OPERATION_LIMIT = f"{_settings.rate_limit_write}/minute"

# In-memory storage: counters are per process and reset on restart
limiter = Limiter(
    key_func=get_remote_address,
    enabled=_settings.rate_limit_enabled,
)
