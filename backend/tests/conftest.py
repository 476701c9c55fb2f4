"""
Tool Analyzer Backend — Shared Test Fixtures

Provides a mocked LLM, sample model answers and an isolated app/client per
test for deterministic, fast unit tests.
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient, ASGITransport

# Ensure tool_analyzer is importable when running from backend/
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


# -----------------------------------------------------------------------------
# Environment Setup (before importing tool_analyzer modules)
# -----------------------------------------------------------------------------

os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("LLM_MODEL", "openai/gpt-4")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:3000")
os.environ.setdefault("ANALYSIS_RATE_LIMITS", "10/hour;3/day")


# -----------------------------------------------------------------------------
# Mock Response Classes
# -----------------------------------------------------------------------------


@dataclass
class MockLLMMessage:
    """Mock message from LLM response."""
    content: Optional[str]


@dataclass
class MockLLMChoice:
    """Mock choice from LLM response."""
    message: MockLLMMessage


@dataclass
class MockLLMUsage:
    """Mock usage stats from LLM response."""
    total_tokens: int = 100
    prompt_tokens: int = 50
    completion_tokens: int = 50


@dataclass
class MockLLMResponse:
    """Mock LLM completion response."""
    choices: list[MockLLMChoice]
    usage: MockLLMUsage = None

    def __post_init__(self):
        if self.usage is None:
            self.usage = MockLLMUsage()


def create_mock_llm_response(content: Optional[str]) -> MockLLMResponse:
    """Create a mock LLM response with given content."""
    return MockLLMResponse(
        choices=[MockLLMChoice(message=MockLLMMessage(content=content))]
    )


# -----------------------------------------------------------------------------
# Sample Model Answers
# -----------------------------------------------------------------------------

SAMPLE_RESPONSE = """Here is the competitive analysis for Notion.

| Tool Name | Pros | Cons | Gaps/Needs |
|-----------|------|------|------------|
| Obsidian | Local-first, fast | Sync costs extra | Real-time collaboration |
| Coda | Powerful formulas | Steep learning curve | Offline mode |
| Evernote | Mature web clipper | Dated UI | Modern databases |

---

## Summary

A lightweight, offline-first workspace with real-time collaboration would beat the incumbents on speed and price.

---

## Product Ideas

**PocketWiki**
- Offline-first page editor
- Peer-to-peer sync
- Graph view on mobile
- Voice capture to notes
- One-tap publishing

**FormulaDesk**
- Spreadsheet formulas in docs
- Live data connectors
- Template marketplace
- Version history per cell
- Team permissions

**ClipMind**
- AI web clipper
- Automatic tagging
- Highlights to flashcards
- Cross-device reading queue
- Weekly digest email
"""


@pytest.fixture
def sample_response() -> str:
    """Well-formed model answer: 3 rows, one summary paragraph, 3 ideas x 5 features."""
    return SAMPLE_RESPONSE


# -----------------------------------------------------------------------------
# LLM Mocking Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def mock_llm(monkeypatch):
    """
    Mock litellm.acompletion to return the sample answer.

    Returns the mock so tests can inspect call arguments.
    """
    async def mock_acompletion(*args, **kwargs) -> MockLLMResponse:
        return create_mock_llm_response(SAMPLE_RESPONSE)

    mock = AsyncMock(side_effect=mock_acompletion)
    monkeypatch.setattr("litellm.acompletion", mock)
    return mock


@pytest.fixture
def mock_llm_with_response(monkeypatch):
    """
    Factory fixture to mock LLM with a specific text answer.

    Usage:
        def test_example(mock_llm_with_response):
            mock = mock_llm_with_response("| Tool Name | ...")
    """
    def _create_mock(content: Optional[str]):
        async def mock_acompletion(*args, **kwargs) -> MockLLMResponse:
            return create_mock_llm_response(content)

        mock = AsyncMock(side_effect=mock_acompletion)
        monkeypatch.setattr("litellm.acompletion", mock)
        return mock

    return _create_mock


@pytest.fixture
def mock_llm_failure(monkeypatch):
    """
    Factory fixture to make litellm.acompletion raise the given exception.

    Usage:
        mock_llm_failure(Exception("429 rate_limit_exceeded"))
    """
    def _create_mock(error: Exception):
        mock = AsyncMock(side_effect=error)
        monkeypatch.setattr("litellm.acompletion", mock)
        return mock

    return _create_mock


# -----------------------------------------------------------------------------
# HTTP Client Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def usage_limiter():
    """Fresh in-memory limiter so quota state never leaks between tests."""
    from tool_analyzer.ratelimit import UsageLimiter
    return UsageLimiter("10/hour;3/day", "async+memory://")


@pytest.fixture
def app(usage_limiter):
    """An isolated FastAPI app wired to the per-test limiter."""
    from tool_analyzer.main import create_app
    return create_app(usage_limiter=usage_limiter)


@pytest.fixture
async def client(app):
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
