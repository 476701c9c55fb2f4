"""Dependency injection for FastAPI routes."""

from typing import Annotated

from fastapi import Depends, Request
from slowapi.util import get_remote_address

from tool_analyzer.ratelimit import UsageLimiter


def get_usage_limiter(request: Request) -> UsageLimiter:
    """The app-scoped usage limiter created in create_app()."""
    return request.app.state.usage_limiter


def get_client_key(request: Request) -> str:
    """Quota key for the caller: first X-Forwarded-For hop, else the peer address."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded.split(",")[0].strip()
    return first_hop or get_remote_address(request)


def get_request_id(request: Request) -> str:
    return request.headers.get("X-Request-Id", "none")


# Type aliases for dependency injection
UsageQuota = Annotated[UsageLimiter, Depends(get_usage_limiter)]
ClientKey = Annotated[str, Depends(get_client_key)]
RequestId = Annotated[str, Depends(get_request_id)]
