"""
Tool Analyzer Backend — Central Configuration

All environment variables and LLM settings live here.
Import `settings`, `LLM_CONFIG`, `log`, and `generate_error_code` from this module.
Do not read `os.environ` anywhere else.
"""

import uuid
from datetime import datetime, timezone

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All environment variables. Loaded from .env or the host environment."""

    # LLM Provider
    openai_api_key: str = ""          # Passed to litellm when set, otherwise litellm reads its own env
    llm_model: str = "openai/gpt-4"

    # Usage quotas ("limits" notation, several windows separated by ';')
    analysis_rate_limits: str = "10/hour;3/day"
    rate_limit_storage_uri: str = "async+memory://"  # e.g. async+redis://localhost:6379 in deployment

    # App
    environment: str = "development"  # "development" | "production"
    cors_origins: str = "http://localhost:3000"  # Comma-separated for multiple origins

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import this everywhere
settings = Settings()


# ──────────────────────────────────────────────────────
# Logging Utilities
# ──────────────────────────────────────────────────────

def generate_error_code() -> str:
    """Generate a short, user-friendly error reference code.

    Format: 'TA-' followed by 6 uppercase hex characters.
    Example: 'TA-3F8A2C'

    The same code is logged on the backend AND returned in the ErrorResponse,
    so the user can quote it and the team can grep logs for it.
    """
    return f"TA-{uuid.uuid4().hex[:6].upper()}"


def log(level: str, message: str, **context) -> None:
    """Structured print-based logger.

    Every log line follows the format:
        [ISO_TIMESTAMP] [LEVEL] message | key1=value1 key2=value2

    Args:
        level: One of "INFO", "WARN", "ERROR".
        message: Human-readable description of what happened.
        **context: Arbitrary key-value pairs. Include request_id when available.

    Usage:
        log("INFO", "pipeline started", request_id="abc-123", product="Notion")
        log("ERROR", "llm call failed", request_id="abc-123", model="openai/gpt-4",
            error_code="TA-3F8A2C", error=str(e))
    """
    ts = datetime.now(timezone.utc).isoformat()
    ctx = " ".join(f"{k}={v}" for k, v in context.items())
    print(f"[{ts}] [{level}] {message} | {ctx}", flush=True)


# ──────────────────────────────────────────────────────
# LLM Configuration
# ──────────────────────────────────────────────────────

LLM_CONFIG = {
    "model": settings.llm_model,
    "temperature": 0.7,
    "max_tokens": 2000,
    "timeout_seconds": 90,
}
