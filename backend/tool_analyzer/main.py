"""
Tool Analyzer Backend — FastAPI Application Factory

App creation, middleware (CORS, request ID logging), usage limiter, router registration.
Run with: uvicorn tool_analyzer.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from tool_analyzer.api import analyze, export
from tool_analyzer.config import log, settings
from tool_analyzer.ratelimit import UsageLimiter

VERSION = "0.1.0"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Log the X-Request-Id header from every incoming request.

    Clients may send X-Request-Id on every call so errors can be correlated
    with backend logs.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-Id", "none")
        log(
            "INFO",
            "request received",
            method=request.method,
            path=request.url.path,
            request_id=request_id,
        )
        response = await call_next(request)
        return response


def create_app(usage_limiter: UsageLimiter | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Steps:
        1. Create FastAPI instance with title, version, description
        2. Add CORS middleware (origins from settings.cors_origins)
        3. Add request ID logging middleware
        4. Attach the usage limiter (built from settings unless one is passed in)
        5. Register routers (analyze, export) and the health check
        6. Return the app
    """
    app = FastAPI(
        title="Tool Analyzer API",
        version=VERSION,
        description="Competitive tool analysis — comparison table, summary and product ideas from one LLM call.",
    )

    # CORS
    origins = [origin.strip() for origin in settings.cors_origins.split(",")]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-RateLimit-Remaining"],
    )

    # Request ID logging
    app.add_middleware(RequestIdMiddleware)

    # Usage quota, injected into handlers via api.deps.get_usage_limiter
    app.state.usage_limiter = usage_limiter or UsageLimiter(
        settings.analysis_rate_limits,
        settings.rate_limit_storage_uri,
    )
    log(
        "INFO",
        "app created",
        environment=settings.environment,
        rate_limits=app.state.usage_limiter.limits,
    )

    # Routers
    app.include_router(analyze.router)
    app.include_router(export.router)

    @app.get("/api/health")
    async def health_check():
        """
        GET /api/health

        Returns: { "status": "ok", "version": "0.1.0" }
        """
        return {"status": "ok", "version": VERSION}

    return app


app = create_app()
