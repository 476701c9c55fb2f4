"""
Single source of truth for all Pydantic models (requests, responses, parsed analysis types).
"""

from __future__ import annotations

import math
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

Tone = Literal["critical", "neutral", "friendly"]
Focus = Literal["innovation", "UX", "AI"]

TONES: tuple[str, ...] = ("critical", "neutral", "friendly")
FOCUSES: tuple[str, ...] = ("innovation", "UX", "AI")

PRODUCT_NAME_MAX_LENGTH = 50


# -----------------------------------------------------------------------------
# Request Models
# -----------------------------------------------------------------------------


class AnalysisOptions(BaseModel):
    """Tone / focus / result-limit selections for one analysis.

    Never rejects input: unknown tone or focus values become the defaults and
    a non-numeric result limit becomes None ("use the default"). Clamping of
    the limit happens where it is used, in the prompt builder.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tone: Tone = "critical"
    focus: Focus = "innovation"
    result_limit: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("result_limit", "limit", "resultLimit"),
        description="Requested number of competing tools, clamped to [1, 15] at use",
    )

    @field_validator("tone", mode="before")
    @classmethod
    def default_unknown_tone(cls, value: Any) -> str:
        return value if value in TONES else TONES[0]

    @field_validator("focus", mode="before")
    @classmethod
    def default_unknown_focus(cls, value: Any) -> str:
        return value if value in FOCUSES else FOCUSES[0]

    @field_validator("result_limit", mode="before")
    @classmethod
    def coerce_result_limit(cls, value: Any) -> Optional[int]:
        return coerce_int(value)


def coerce_int(value: Any) -> Optional[int]:
    """Best-effort integer conversion; None for anything that is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        pass
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    return int(number) if math.isfinite(number) else None


class AnalyzeRequest(BaseModel):
    product: str = Field(
        ...,
        max_length=PRODUCT_NAME_MAX_LENGTH,
        description="Product name to analyze",
    )
    options: AnalysisOptions = Field(default_factory=AnalysisOptions)

    @field_validator("product")
    @classmethod
    def strip_product(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Product name is required")
        return value


# -----------------------------------------------------------------------------
# Parsed Analysis Models
# -----------------------------------------------------------------------------


class ComparisonRow(BaseModel):
    name: str
    pros: str
    cons: str
    gaps: str


class ProductIdea(BaseModel):
    title: str
    features: list[str] = []


class AnalysisResult(BaseModel):
    rows: list[ComparisonRow] = []
    summary: str = ""
    ideas: list[ProductIdea] = []
    rendered_markdown: str = ""


# -----------------------------------------------------------------------------
# Response Models
# -----------------------------------------------------------------------------


class AnalyzeResponse(BaseModel):
    product: str
    options: AnalysisOptions
    result: AnalysisResult
    remaining_requests: int


ErrorCategory = Literal["rate_limited", "upstream_auth_error", "generic_failure"]


class ErrorResponse(BaseModel):
    error: str
    code: ErrorCategory
    error_code: str
