"""
Tool Analyzer Backend — Result Exporters

Render an AnalysisResult as a downloadable CSV, JSON or Markdown document.
"""

import csv
import io
from dataclasses import dataclass
from typing import Callable

from tool_analyzer.models import AnalysisResult

EXPORT_FILENAME = "competitive-analysis"
CSV_HEADER = ["Tool Name", "Pros", "Cons", "Gaps"]


def to_csv(result: AnalysisResult) -> str:
    """Comparison rows as CSV. Every cell is quoted, embedded quotes are doubled."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    quoted = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in result.rows:
        quoted.writerow([row.name, row.pros, row.cons, row.gaps])
    return buffer.getvalue()


def to_json(result: AnalysisResult) -> str:
    return result.model_dump_json(indent=2)


def to_markdown(result: AnalysisResult) -> str:
    """Rendered table + summary, followed by the product ideas when there are any."""
    parts = [result.rendered_markdown]
    if result.ideas:
        parts.append("\n\n## Product Ideas\n")
        for idea in result.ideas:
            bullets = "\n".join(f"- {feature}" for feature in idea.features)
            parts.append(f"\n**{idea.title}**\n{bullets}\n")
    return "".join(parts)


@dataclass(frozen=True)
class ExportFormat:
    extension: str
    media_type: str
    render: Callable[[AnalysisResult], str]

    @property
    def filename(self) -> str:
        return f"{EXPORT_FILENAME}.{self.extension}"


EXPORT_FORMATS: dict[str, ExportFormat] = {
    "csv": ExportFormat("csv", "text/csv; charset=utf-8", to_csv),
    "json": ExportFormat("json", "application/json", to_json),
    "markdown": ExportFormat("md", "text/markdown; charset=utf-8", to_markdown),
}
