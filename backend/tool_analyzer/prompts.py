"""
Tool Analyzer Backend — LLM Prompt Templates

The analysis prompt is defined here. Its output template is the contract the
response parser (parser.py) is keyed to, so the two must change together.
"""

from typing import Any, Optional

from tool_analyzer.models import AnalysisOptions, coerce_int

# -----------------------------------------------------------------------------
# Option fragments (first entry of each mapping is the fallback)
# -----------------------------------------------------------------------------

TONE_INSTRUCTIONS = {
    "critical": "Be brutally honest and critical.",
    "neutral": "Be objective and neutral.",
    "friendly": "Be supportive and friendly.",
}

FOCUS_INSTRUCTIONS = {
    "innovation": "Focus especially on technical and innovative differentiation.",
    "UX": "Focus especially on UX/UI and usability issues.",
    "AI": "Focus on AI/automation features and limitations.",
}

RESULT_LIMIT_MIN = 1
RESULT_LIMIT_MAX = 15
RESULT_LIMIT_DEFAULT = 5


# -----------------------------------------------------------------------------
# build_analysis_prompt
# -----------------------------------------------------------------------------

ANALYSIS_PROMPT = """Analyze the SaaS product "{product}".
{tone}
{focus}
Find and list up to {limit} similar tools (loose match is OK, pick top with most users if possible).
Return your answer as a Markdown table with columns: Tool Name, Pros, Cons, Gaps/Needs.

Then summarize: what product concept would be most likely to succeed in the current English SaaS market (brutally).

Finally, based on this analysis, suggest 3 brand new SaaS product ideas (not existing yet), each with:
- a short, catchy English title (bold, one line, max 5 words),
- and 5 bullet-pointed specialized features (as a Markdown list).

Format your response exactly like this:

| Tool Name | Pros | Cons | Gaps/Needs |
|-----------|------|------|------------|
| Tool1 | ... | ... | ... |
| Tool2 | ... | ... | ... |

---

## Summary

(summary text here)

---

## Product Ideas

**Title 1**
- feature 1
- feature 2
- feature 3
- feature 4
- feature 5

**Title 2**
- feature 1
- feature 2
- feature 3
- feature 4
- feature 5

**Title 3**
- feature 1
- feature 2
- feature 3
- feature 4
- feature 5"""


def clamp_result_limit(value: Any) -> int:
    """
    Clamp a requested result limit into [1, 15].

    None or non-numeric input yields the default of 5; 0 yields 1, 999 yields 15.
    """
    number = coerce_int(value)
    if number is None:
        return RESULT_LIMIT_DEFAULT
    return max(RESULT_LIMIT_MIN, min(RESULT_LIMIT_MAX, number))


def build_analysis_prompt(product_name: str, options: Optional[AnalysisOptions] = None) -> str:
    """
    Build the competitive analysis prompt for one product.

    Pure and total: unknown tone/focus values fall back to the first fragment
    of each mapping and the result limit is clamped, so this never raises.

    Args:
        product_name: Product to analyze (already validated by the caller, <= 50 chars).
        options: Tone, focus and result limit. None means all defaults.

    Returns:
        The full prompt string, including the verbatim output template.
    """
    options = options or AnalysisOptions()
    tone_text = TONE_INSTRUCTIONS.get(options.tone, TONE_INSTRUCTIONS["critical"])
    focus_text = FOCUS_INSTRUCTIONS.get(options.focus, FOCUS_INSTRUCTIONS["innovation"])
    return ANALYSIS_PROMPT.format(
        product=product_name,
        tone=tone_text,
        focus=focus_text,
        limit=clamp_result_limit(options.result_limit),
    )


def build_analysis_messages(product_name: str, options: Optional[AnalysisOptions] = None) -> list[dict]:
    """Wrap the analysis prompt as the chat message list call_llm() takes."""
    return [{"role": "user", "content": build_analysis_prompt(product_name, options)}]
