"""Shared slowapi limiter.

Lives outside main.py so routers can decorate endpoints without importing
the application module. Limits are keyed by client IP.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
