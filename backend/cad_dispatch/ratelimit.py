"""Shared rate limiter for HTTP endpoints."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from cad_dispatch.config import get_settings

settings = get_settings()

limiter = Limiter(key_func=get_remote_address)

EVENTS_RATE_LIMIT = f"{settings.rate_limit_per_minute}/minute"
