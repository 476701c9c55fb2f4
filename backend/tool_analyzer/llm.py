"""
Tool Analyzer Backend — LLM Interactions

A single litellm completion per analysis. Provider failures are mapped to
typed exceptions here; the API layer turns them into error categories.
No retries and no fallback chain.
"""

import time

import litellm

from tool_analyzer.config import LLM_CONFIG, generate_error_code, log, settings

litellm.suppress_debug_info = True
litellm.drop_params = True  # Prevent unsupported-param errors across providers


# ─────────────────────────────────────────────────────────────────────────────
# Custom Exceptions
# ─────────────────────────────────────────────────────────────────────────────


class LLMError(Exception):
    """The model call failed or returned nothing usable."""

    pass


class LLMRateLimitError(LLMError):
    """The model API rejected the call for rate-limit or quota reasons."""

    pass


class LLMAuthError(LLMError):
    """The model API rejected our credentials."""

    pass


def _is_rate_limit_error(error: Exception) -> bool:
    """Check if an error is a rate-limit / quota error."""
    if isinstance(error, litellm.RateLimitError):
        return True
    error_str = str(error).lower()
    return any(kw in error_str for kw in (
        "rate_limit", "ratelimit", "rate limit", "429", "quota", "resource_exhausted",
    ))


def _is_auth_error(error: Exception) -> bool:
    """Check if an error is an authentication / invalid key error."""
    if isinstance(error, litellm.AuthenticationError):
        return True
    error_str = str(error).lower()
    return any(kw in error_str for kw in (
        "401", "invalid api key", "incorrect api key", "authentication", "unauthorized",
    ))


def _classify_error(error: Exception) -> LLMError:
    if _is_rate_limit_error(error):
        return LLMRateLimitError(str(error))
    if _is_auth_error(error):
        return LLMAuthError(str(error))
    return LLMError(str(error))


# ─────────────────────────────────────────────────────────────────────────────
# Core Functions
# ─────────────────────────────────────────────────────────────────────────────


async def call_llm(messages: list[dict], request_id: str | None = None) -> str:
    """
    Call the configured model once and return its text content.

    Args:
        messages: Chat messages, passed to the model verbatim.
        request_id: Optional request ID for logging correlation.

    Returns:
        Raw response content string from the LLM.

    Raises:
        LLMRateLimitError: Upstream rate limit or quota exhausted.
        LLMAuthError: Upstream rejected the API key.
        LLMError: Any other failure, including an empty response.
    """
    model = LLM_CONFIG["model"]
    log("INFO", "llm call started", request_id=request_id, model=model)
    start = time.perf_counter()

    completion_kwargs = {
        "model": model,
        "messages": messages,
        "temperature": LLM_CONFIG["temperature"],
        "max_tokens": LLM_CONFIG["max_tokens"],
        "timeout": LLM_CONFIG["timeout_seconds"],
    }
    if settings.openai_api_key:
        completion_kwargs["api_key"] = settings.openai_api_key

    try:
        response = await litellm.acompletion(**completion_kwargs)
    except Exception as e:
        mapped = _classify_error(e)
        log(
            "ERROR",
            "llm call failed",
            request_id=request_id,
            model=model,
            error_type=type(mapped).__name__,
            error=str(e),
            error_code=generate_error_code(),
        )
        raise mapped from e

    duration_ms = int((time.perf_counter() - start) * 1000)

    content = ""
    if response.choices:
        msg = response.choices[0].message
        if msg.content:
            content = msg.content

    tokens_used = None
    if hasattr(response, "usage") and response.usage:
        tokens_used = getattr(response.usage, "total_tokens", None)

    if not content:
        log(
            "ERROR",
            "llm returned empty content",
            request_id=request_id,
            model=model,
            duration_ms=duration_ms,
            tokens_used=tokens_used,
        )
        raise LLMError(f"No response from {model}")

    log(
        "INFO",
        "llm call succeeded",
        request_id=request_id,
        model=model,
        duration_ms=duration_ms,
        tokens_used=tokens_used,
    )
    return content
