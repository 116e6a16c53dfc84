"""Rate limiter configuration module.

This module is separate from main.py to avoid circular imports when routers
need to access the limiter.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Keyed by client address; shared by the auth and contact routers
limiter = Limiter(key_func=get_remote_address)

LOGIN_LIMIT = "5/minute"
REGISTER_LIMIT = "3/minute"
CONTACT_LIMIT = "5/hour"
