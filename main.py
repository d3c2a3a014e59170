"""CLI entrypoint: search papers for a topic, then explore related papers or summaries."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from dotenv import load_dotenv

from errors import PaperNotFoundError
from filters import available_sources, filter_by_sources
from models import Paper
from ranking import SORT_MODES, sort_papers
from service import PaperSearchService

LOGGER = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(
        description="Aggregate papers from OpenAlex, arXiv, Semantic Scholar, Springer, Elsevier and IEEE"
    )
    parser.add_argument("--topic", required=True, help="Research topic to search for")
    parser.add_argument(
        "--sort",
        choices=SORT_MODES,
        default="trending",
        help="Result ordering (default: trending)",
    )
    parser.add_argument(
        "--source",
        action="append",
        default=[],
        help="Only show papers from this canonical source (repeatable, e.g. --source arXiv)",
    )
    parser.add_argument(
        "--related",
        type=int,
        default=None,
        metavar="INDEX",
        help="Show papers related to the result at INDEX of the trending list",
    )
    parser.add_argument(
        "--summarize",
        type=int,
        default=None,
        metavar="INDEX",
        help="Generate an AI summary for the result at INDEX of the trending list",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Per-source timeout in seconds")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a text listing")
    return parser.parse_args(argv)


def run(args: argparse.Namespace, service: PaperSearchService | None = None) -> int:
    """Execute one CLI invocation and return the process exit code."""
    service = service or PaperSearchService(timeout=args.timeout)

    ranked = service.search(args.topic)
    shown = sort_papers(filter_by_sources(ranked, args.source), args.sort)
    LOGGER.info(
        "Search complete: topic=%r total=%s shown=%s sources=%s",
        args.topic,
        len(ranked),
        len(shown),
        ", ".join(available_sources(ranked)) or "-",
    )

    output: dict[str, Any] = {"papers": [paper.to_dict() for paper in shown]}

    try:
        if args.related is not None:
            output.update(service.related(args.related).to_dict())
        if args.summarize is not None:
            output["summarized"] = service.summarize(args.summarize).to_dict()
    except PaperNotFoundError as exc:
        LOGGER.error("%s", exc)
        return 1
    except (RuntimeError, ValueError) as exc:
        LOGGER.error("Summary failed: %s", exc)
        return 1

    if args.json:
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        _print_listing(ranked, shown, output)
    return 0


def _print_listing(ranked: list[Paper], shown: list[Paper], output: dict[str, Any]) -> None:
    # Indexes printed are positions in the trending list, which --related and --summarize use.
    corpus_index = {id(paper): position for position, paper in enumerate(ranked)}
    for paper in shown:
        print(_format_line(corpus_index[id(paper)], paper))

    if "clickedPaper" in output:
        print(f"\nRelated to: {output['clickedPaper']['title']}")
        for position, related in enumerate(output["relatedPapers"]):
            print(f"  {position + 1}. {related['title']} ({related['source']})")
        if not output["relatedPapers"]:
            print("  (no related papers found)")

    if "summarized" in output:
        summarized = output["summarized"]
        print(f"\nSummary of: {summarized['title']}")
        print(summarized.get("computedSummary", ""))


def _format_line(position: int, paper: Paper) -> str:
    year = paper.year or "n.d."
    badges = f" [{', '.join(paper.tags)}]" if paper.tags else ""
    return f"{position:>3}. {paper.title} ({paper.source}, {year}, {paper.citations} cites){badges}"


def main(argv: list[str] | None = None) -> None:
    """Initialize config and execute one search."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
