"""
Dry-run a single live analysis — prompt → LLM → parser

Calls the configured model for real (needs OPENAI_API_KEY or a .env) and
prints what the parser extracted, so prompt/parser drift is easy to spot.

Usage:
    cd backend
    python3 -m scripts.dry_run_analyze "Notion" --tone neutral --focus UX --limit 3
    python3 -m scripts.dry_run_analyze --from-file response.md
"""

import argparse
import asyncio
import time

from tool_analyzer.llm import LLMError, call_llm
from tool_analyzer.models import AnalysisOptions
from tool_analyzer.parser import parse_analysis_response
from tool_analyzer.prompts import build_analysis_messages


def _print_result(raw: str) -> None:
    result = parse_analysis_response(raw)

    print(f"\n{'=' * 70}")
    print(f"ROWS ({len(result.rows)})")
    print(f"{'=' * 70}")
    for i, row in enumerate(result.rows, 1):
        print(f"  {i}. {row.name}")
        print(f"     pros: {row.pros[:80]}")
        print(f"     cons: {row.cons[:80]}")
        print(f"     gaps: {row.gaps[:80]}")

    print(f"\n{'=' * 70}")
    print(f"SUMMARY ({len(result.summary)} chars)")
    print(f"{'=' * 70}")
    print(result.summary or "  (none)")

    print(f"\n{'=' * 70}")
    print(f"IDEAS ({len(result.ideas)})")
    print(f"{'=' * 70}")
    for idea in result.ideas:
        print(f"  ** {idea.title} ** ({len(idea.features)} features)")
        for feature in idea.features:
            print(f"     - {feature}")


async def main() -> None:
    arg_parser = argparse.ArgumentParser(description="Run one analysis and show the parsed result.")
    arg_parser.add_argument("product", nargs="?", default="Notion")
    arg_parser.add_argument("--tone", default="critical")
    arg_parser.add_argument("--focus", default="innovation")
    arg_parser.add_argument("--limit", default=5)
    arg_parser.add_argument("--from-file", help="Parse a saved model response instead of calling the model")
    args = arg_parser.parse_args()

    if args.from_file:
        with open(args.from_file, encoding="utf-8") as f:
            _print_result(f.read())
        return

    options = AnalysisOptions(tone=args.tone, focus=args.focus, limit=args.limit)
    print(f"Analyzing {args.product!r} with {options.model_dump()}")

    start = time.perf_counter()
    try:
        raw = await call_llm(build_analysis_messages(args.product, options), request_id="dry-run")
    except LLMError as e:
        print(f"\nLLM call failed ({type(e).__name__}): {e}")
        return
    print(f"Model answered in {int((time.perf_counter() - start) * 1000)}ms, {len(raw)} chars")

    _print_result(raw)


if __name__ == "__main__":
    asyncio.run(main())
