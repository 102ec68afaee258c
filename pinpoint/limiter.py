"""Rate limiter shared by the app middleware and the routers.

Routes without their own @limiter.limit get RATE_LIMIT_DEFAULT.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import RATE_LIMIT_DEFAULT

limiter = Limiter(key_func=get_remote_address, default_limits=[RATE_LIMIT_DEFAULT])
