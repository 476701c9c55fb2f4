"""
Tool Analyzer Backend — Analysis Response Parser

Turns the model's Markdown answer (shaped by prompts.ANALYSIS_PROMPT) into an
AnalysisResult. Best-effort: text that does not match the template yields
fewer or zero structured results, never an exception.
"""

import re

from tool_analyzer.models import AnalysisResult, ComparisonRow, ProductIdea

TABLE_HEADER_PREFIX = "| Tool Name"
TABLE_SEPARATOR_RE = re.compile(r"^\|\s*-+")

SUMMARY_RE = re.compile(
    r"## Summary[^\n]*(.*?)(?:\n---[ \t]*(?=\n|\Z)|\n##|\Z)",
    re.IGNORECASE | re.DOTALL,
)
PRODUCT_IDEAS_MARKER_RE = re.compile(r"## Product Ideas", re.IGNORECASE)
IDEA_RE = re.compile(r"\*\*(.+?)\*\*\s*\n((?:-\s.*\n?){2,})")
BULLET_PREFIX_RE = re.compile(r"^-\s*")

RENDERED_TABLE_HEADER = (
    "| Tool Name | Pros | Cons | Gaps |\n"
    "|-----------|------|------|------|\n"
)


# -----------------------------------------------------------------------------
# Section Extractors
# -----------------------------------------------------------------------------


def extract_comparison_rows(text: str) -> list[ComparisonRow]:
    """
    Extract comparison table rows, scanning line by line.

    A "| Tool Name" header or a "|---" separator line enters the table region
    without producing a row. The region ends at the first non-empty line that
    does not start with "|"; blank lines keep it open.
    """
    rows: list[ComparisonRow] = []
    in_table = False

    for line in text.split("\n"):
        stripped = line.strip()

        if stripped.startswith(TABLE_HEADER_PREFIX) or TABLE_SEPARATOR_RE.match(stripped):
            in_table = True
            continue

        if in_table and stripped.startswith("|"):
            cells = [cell.strip() for cell in stripped.split("|")[1:-1]]
            if len(cells) >= 4 and "---" not in cells[0]:
                rows.append(ComparisonRow(name=cells[0], pros=cells[1], cons=cells[2], gaps=cells[3]))

        if in_table and stripped and not stripped.startswith("|"):
            in_table = False

    return rows


def extract_summary(text: str) -> str:
    """Return the trimmed text of the "## Summary" section, or "" if there is none."""
    match = SUMMARY_RE.search(text)
    return match.group(1).strip() if match else ""


def extract_product_ideas(text: str) -> list[ProductIdea]:
    """
    Extract "**Title**" + bullet-list blocks from the "## Product Ideas" section.

    Only the text after the marker is searched. A block needs at least two
    bullet lines to match; ideas with no non-empty feature are dropped.
    """
    sections = PRODUCT_IDEAS_MARKER_RE.split(text)
    if len(sections) < 2:
        return []

    ideas: list[ProductIdea] = []
    for match in IDEA_RE.finditer(sections[1]):
        title = match.group(1).strip()
        features = [
            BULLET_PREFIX_RE.sub("", line).strip()
            for line in match.group(2).split("\n")
        ]
        features = [feature for feature in features if feature]
        if title and features:
            ideas.append(ProductIdea(title=title, features=features))
    return ideas


def render_markdown(rows: list[ComparisonRow], summary: str) -> str:
    """Rebuild the comparison table and summary section from parsed fields."""
    table = RENDERED_TABLE_HEADER + "".join(
        f"| {row.name} | {row.pros} | {row.cons} | {row.gaps} |\n" for row in rows
    )
    return f"{table}\n## Summary\n\n{summary}"


# -----------------------------------------------------------------------------
# Entry Point
# -----------------------------------------------------------------------------


def parse_analysis_response(raw_text: str) -> AnalysisResult:
    """
    Parse the raw model answer into an AnalysisResult.

    Never raises: None or non-string input is treated as empty text and any
    section that is missing simply comes back empty.
    """
    text = raw_text if isinstance(raw_text, str) else ""
    text = text.replace("\r\n", "\n")

    rows = extract_comparison_rows(text)
    summary = extract_summary(text)
    ideas = extract_product_ideas(text)

    return AnalysisResult(
        rows=rows,
        summary=summary,
        ideas=ideas,
        rendered_markdown=render_markdown(rows, summary),
    )
