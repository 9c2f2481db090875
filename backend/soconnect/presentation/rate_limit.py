"""Shared slowapi limiter. Registered on app.state by the app factory."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from soconnect.config.settings import Config

limiter = Limiter(key_func=get_remote_address, enabled=Config.RATE_LIMIT_ENABLED)
