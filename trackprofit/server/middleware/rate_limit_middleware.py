"""
Rate Limit Middleware for FastAPI.

Applies the API rate limit per client, identified by the user id header or,
failing that, the client address. Denied requests get a 429 with
``Retry-After``; allowed ones carry the remaining budget in
``X-RateLimit-Remaining``. The security event of a block is stored in the
audit trail before the 429 is returned.
"""

import time
from typing import Callable, Iterable, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from trackprofit.core.database import async_session_maker
from trackprofit.core.logging_config import get_logger
from trackprofit.security import API_RATE_LIMIT, RateLimitConfig, RateLimiter, rate_limiter

from ..core.constant import USER_ID_HEADER
from ..services.security_audit import persist_with_factory

logger = get_logger(__name__)

EXEMPT_PATHS = ("/health", "/version")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject clients exceeding the API rate limit."""

    def __init__(
        self,
        app: ASGIApp,
        limiter: Optional[RateLimiter] = None,
        config: RateLimitConfig = API_RATE_LIMIT,
        exempt_paths: Iterable[str] = EXEMPT_PATHS,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    ) -> None:
        super().__init__(app)
        self.limiter = limiter or rate_limiter
        self.config = config
        self.exempt_paths = tuple(exempt_paths)
        self.session_factory = session_factory or async_session_maker

    @staticmethod
    def client_identifier(request: Request) -> str:
        user_id = request.headers.get(USER_ID_HEADER)
        if user_id:
            return f"user:{user_id}"
        return f"ip:{request.client.host if request.client else 'unknown'}"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS" or request.url.path in self.exempt_paths:
            return await call_next(request)

        identifier = self.client_identifier(request)
        result = self.limiter.check(identifier, self.config)

        if not result.allowed:
            retry_after = result.retry_after(time.time())
            logger.warning(f"Rate limit exceeded for {identifier} on {request.method} {request.url.path}")
            await persist_with_factory(self.session_factory)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"detail": "Too many requests", "retry_after": retry_after},
                headers={"Retry-After": str(retry_after)},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        return response
