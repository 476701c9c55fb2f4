"""
Tool Analyzer Backend — Analyze API (POST /api/analyze)

Validates the request, applies the caller quota, runs prompt → LLM → parser
and maps model failures to caller-visible error categories.
"""

import time

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from tool_analyzer import llm, parser, prompts
from tool_analyzer.api.deps import ClientKey, RequestId, UsageQuota
from tool_analyzer.config import generate_error_code, log
from tool_analyzer.llm import LLMAuthError, LLMError, LLMRateLimitError
from tool_analyzer.models import AnalyzeRequest, AnalyzeResponse, ErrorResponse

router = APIRouter(prefix="/api/analyze", tags=["analyze"])

QUOTA_EXCEEDED_MESSAGE = "Rate limit exceeded. Please try again later."
UPSTREAM_RATE_LIMITED_MESSAGE = "Model API rate limit exceeded. Please try again later."
UPSTREAM_AUTH_MESSAGE = "Invalid API key configuration."
GENERIC_FAILURE_MESSAGE = "An error occurred while processing your request."


def _error_response(status_code: int, code: str, message: str, **context) -> JSONResponse:
    """Log a mapped failure under a fresh reference code and build the error body."""
    error_code = generate_error_code()
    log("ERROR", "analysis failed", category=code, status=status_code, error_code=error_code, **context)
    body = ErrorResponse(error=message, code=code, error_code=error_code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post(
    "",
    response_model=AnalyzeResponse,
    responses={
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def analyze(
    request: AnalyzeRequest,
    response: Response,
    limiter: UsageQuota,
    client_key: ClientKey,
    request_id: RequestId,
):
    """
    POST /api/analyze

    Body: { "product": "Notion", "options": { "tone": "critical", "focus": "UX", "limit": 5 } }
    Returns: AnalyzeResponse, or ErrorResponse with status 429 / 502 / 500.
    """
    if not await limiter.check(client_key):
        return _error_response(429, "rate_limited", QUOTA_EXCEEDED_MESSAGE, request_id=request_id)
    await limiter.record(client_key)
    remaining = await limiter.remaining(client_key)

    start = time.perf_counter()
    log(
        "INFO",
        "pipeline started",
        request_id=request_id,
        product=request.product,
        tone=request.options.tone,
        focus=request.options.focus,
    )

    try:
        raw = await llm.call_llm(
            prompts.build_analysis_messages(request.product, request.options),
            request_id=request_id,
        )
    except LLMRateLimitError as e:
        return _error_response(429, "rate_limited", UPSTREAM_RATE_LIMITED_MESSAGE, request_id=request_id, error=str(e))
    except LLMAuthError as e:
        return _error_response(502, "upstream_auth_error", UPSTREAM_AUTH_MESSAGE, request_id=request_id, error=str(e))
    except LLMError as e:
        return _error_response(502, "generic_failure", GENERIC_FAILURE_MESSAGE, request_id=request_id, error=str(e))
    except Exception as e:
        return _error_response(500, "generic_failure", GENERIC_FAILURE_MESSAGE, request_id=request_id, error=str(e))

    result = parser.parse_analysis_response(raw)
    log(
        "INFO",
        "pipeline completed",
        request_id=request_id,
        rows=len(result.rows),
        ideas=len(result.ideas),
        has_summary=bool(result.summary),
        duration_ms=int((time.perf_counter() - start) * 1000),
    )

    response.headers["X-RateLimit-Remaining"] = str(remaining)
    return AnalyzeResponse(
        product=request.product,
        options=request.options,
        result=result,
        remaining_requests=remaining,
    )
