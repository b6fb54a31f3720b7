"""
ReviewLens CLI
==============

Command-line interface for the analysis engine.

Commands:
    summary - Full analysis summary of a JSON review export
    health  - Business health score only

Usage:
    python -m reviewlens.orchestrator.cli summary --input reviews.json
    python -m reviewlens.orchestrator.cli summary --input reviews.json --period last90days --json
    python -m reviewlens.orchestrator.cli health --input reviews.json --comparison yearOverYear
"""

import argparse
import json
import sys
from typing import Any, List, Optional

from ..analysis.analysis_config import AnalysisConfig, ComparisonPeriod, TimePeriod
from ..analysis.errors import InvalidAnalysisConfigError, NoReviewDataError
from ..analysis.summary_engine import AnalysisSummaryEngine
from ..cache.memo_cache import MemoCache
from ..data.config import get_settings
from ..scoring.scoring_config import AnalysisThresholds
from .logging_config import VERBOSE_MODULE_LEVELS, parse_module_levels, setup_logging


def load_review_file(path: str) -> List[Any]:
    """
    Read reviews from a JSON file.

    Accepts either a top-level list or an object with a "reviews" list.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("reviews", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of reviews")
    return data


def _build_engine() -> AnalysisSummaryEngine:
    settings = get_settings()
    return AnalysisSummaryEngine(
        cache=MemoCache(),
        config=AnalysisThresholds(cache_ttl=settings.cache.to_ttl_config()),
    )


def _run_summary(args):
    reviews = load_review_file(args.input)
    config = AnalysisConfig(time_period=args.period, comparison_period=args.comparison)
    return _build_engine().generate(reviews, config, business_name=args.business)


def cmd_summary(args):
    """Print the analysis summary of a review file."""
    try:
        summary = _run_summary(args)
    except NoReviewDataError as e:
        print(f"ERROR: {e.message}")
        return 1
    except (InvalidAnalysisConfigError, ValueError, OSError) as e:
        print(f"ERROR: {e}")
        return 1

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2, default=str))
        return 0

    health = summary.business_health_score
    rating = summary.rating_analysis
    print("=" * 60)
    print(f"ANALYSIS SUMMARY: {summary.data_source.business_name}")
    print("=" * 60)
    print(f"Period: {summary.time_period.current.label}")
    print(f"Reviews: {summary.data_source.total_reviews}")
    print()
    print(f"Health Score: {health.overall}/100")
    for name, value in vars(health.breakdown).items():
        bar_length = int(value / 100 * 20)
        bar = "#" * bar_length + "." * (20 - bar_length)
        print(f"  {name:10} [{bar}] {value}")
    print()
    print(f"Average rating: {rating.trends.current:.2f} ({rating.trends.direction})")
    print(f"Response rate: {summary.response_analytics.response_rate:.1f}%")
    print(f"Positive sentiment: {summary.sentiment_analysis.distribution.positive.percentage:.1f}%")

    areas = summary.thematic_analysis.attention_areas
    if areas:
        print()
        print("Attention areas:")
        for area in areas:
            print(f"  - {area.theme}: {area.average_rating:.1f} stars ({area.urgency})")

    urgent = summary.action_items.urgent
    if urgent:
        print()
        print("Urgent:")
        for item in urgent:
            print(f"  ! {item.description}")
    return 0


def cmd_health(args):
    """Print only the business health score."""
    try:
        summary = _run_summary(args)
    except NoReviewDataError as e:
        print(f"ERROR: {e.message}")
        return 1
    except (InvalidAnalysisConfigError, ValueError, OSError) as e:
        print(f"ERROR: {e}")
        return 1

    health = summary.business_health_score
    if args.json:
        print(json.dumps(summary.to_dict()["businessHealthScore"], indent=2))
        return 0

    print(f"Health Score: {health.overall}/100")
    print(f"  rating trend: {health.rating_trend:+d}")
    print(f"  volume trend: {health.volume_trend:+d}%")
    return 0


def _add_analysis_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input",
        required=True,
        help="JSON file with the reviews",
    )
    parser.add_argument(
        "--period",
        choices=[p.value for p in TimePeriod if p != TimePeriod.CUSTOM],
        default=TimePeriod.ALL.value,
        help="Time period (default: all)",
    )
    parser.add_argument(
        "--comparison",
        choices=[c.value for c in ComparisonPeriod],
        default=ComparisonPeriod.PREVIOUS.value,
        help="Comparison period (default: previous)",
    )
    parser.add_argument(
        "--business",
        default="Current Business",
        help="Business name shown in the report",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="reviewlens",
        description="ReviewLens analysis summary CLI",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    summary_parser = subparsers.add_parser("summary", help="Full analysis summary")
    _add_analysis_arguments(summary_parser)

    health_parser = subparsers.add_parser("health", help="Business health score only")
    _add_analysis_arguments(health_parser)

    args = parser.parse_args(argv)

    log_settings = get_settings().logging
    module_levels = parse_module_levels(log_settings.module_levels)
    if args.verbose:
        module_levels.update(VERBOSE_MODULE_LEVELS)
    setup_logging(
        level="DEBUG" if args.verbose else log_settings.level,
        json_output=log_settings.json_logs,
        log_file=log_settings.log_file,
        module_levels=module_levels,
    )

    if args.command is None:
        parser.print_help()
        return 1

    commands = {
        "summary": cmd_summary,
        "health": cmd_health,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
