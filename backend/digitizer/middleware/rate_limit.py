"""
Rate Limiting - Protect the AI-backed upload endpoint from abuse.

Every upload costs three model calls, so uploads are limited per client IP.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..core.config import RATE_LIMIT_ENABLED, RATE_LIMIT_PER_MINUTE
from ..core.logging_config import get_logger

logger = get_logger(__name__)

# Shared by the gateway (app.state.limiter) and the route decorators
limiter = Limiter(
    key_func=get_remote_address,
    enabled=RATE_LIMIT_ENABLED
)

# Rate limit decorators
rate_limit_per_minute = limiter.limit(f"{RATE_LIMIT_PER_MINUTE}/minute")
