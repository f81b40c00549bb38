"""Main entry point for Career Compass."""

import argparse
import json
import sys
from pathlib import Path

from career_compass import __version__
from career_compass.config.settings import Settings
from career_compass.utils.logging import configure_logging


def _score(value: str) -> float:
    score = float(value)
    if not (0.0 <= score <= 100.0):
        raise argparse.ArgumentTypeError("--min-score must be between 0 and 100")
    return score


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("--top must be a positive integer")
    return number


def _load_answers(path: Path) -> dict:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Answers file must hold a JSON object: {path}")
    return data


def _write_json(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="career-compass",
        description="Career Compass: questionnaire-driven career matching",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m career_compass questions
  python -m career_compass profile answers.json
  python -m career_compass match answers.json --top 5
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file (overrides LOG_FILE)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    questions_parser = subparsers.add_parser(
        "questions",
        help="List the questionnaire, grouped by category",
    )
    questions_parser.add_argument(
        "--category",
        default=None,
        help="Only show one category (e.g. skills)",
    )

    profile_parser = subparsers.add_parser(
        "profile",
        help="Build a profile from a JSON answers file",
    )
    profile_parser.add_argument(
        "answers",
        type=Path,
        help="Path to a JSON object of question id -> answer",
    )

    match_parser = subparsers.add_parser(
        "match",
        help="Rank catalog careers for a JSON answers file",
    )
    match_parser.add_argument(
        "answers",
        type=Path,
        help="Path to a JSON object of question id -> answer",
    )
    match_parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Career catalog file (defaults to CATALOG_PATH)",
    )
    match_parser.add_argument(
        "--top",
        type=_positive_int,
        default=3,
        help="Number of matches to print (default: 3)",
    )
    match_parser.add_argument(
        "--min-score",
        type=_score,
        default=None,
        help="Drop matches scoring below this (0-100)",
    )
    match_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Also write the matches as JSON to this path",
    )

    return parser


def _match_payload(match) -> dict:
    return {
        "career_id": match.career.id,
        "title": match.career.title,
        "overall_score": round(match.overall_score, 2),
        "sub_scores": {k: round(v, 2) for k, v in match.sub_scores.as_dict().items()},
        "confidence": round(match.confidence, 2),
        "strengths": list(match.strengths),
        "gaps": list(match.gaps),
        "recommendations": list(match.recommendations),
    }


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Configure logging
    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(
        level=log_level, log_file=parsed.log_file or settings.log_file
    )

    # If no mode specified, show help
    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.debug(f"Career Compass v{__version__} running {parsed.mode}")

    if parsed.mode == "questions":
        from career_compass.questionnaire.bank import get_default_questionnaire
        from career_compass.questionnaire.models import QuestionCategory

        questionnaire = get_default_questionnaire()
        try:
            categories = (
                [QuestionCategory(parsed.category)]
                if parsed.category
                else list(QuestionCategory)
            )
        except ValueError:
            print(f"Error: unknown category '{parsed.category}'", file=sys.stderr)
            return 1

        for category in categories:
            questions = questionnaire.by_category(category)
            if not questions:
                continue
            print(f"[{category.value}]")
            for question in questions:
                marker = "*" if question.required else " "
                print(f" {marker} {question.id}: {question.question}")
                if question.options:
                    print(f"      options: {', '.join(question.option_values)}")
        return 0

    try:
        answers = _load_answers(parsed.answers)
    except (OSError, ValueError) as e:
        print(f"Error reading answers: {e}", file=sys.stderr)
        return 1

    from career_compass.profile.builder import build_user_profile

    profile = build_user_profile(answers)

    if parsed.mode == "profile":
        from career_compass.questionnaire.progress import get_overall_progress

        print(json.dumps(profile.to_dict(), indent=2))
        print(f"Required questions answered: {get_overall_progress(answers):.0f}%")
        return 0

    if parsed.mode == "match":
        from career_compass.catalog.service import CatalogService
        from career_compass.matching.config import MatchingConfig
        from career_compass.matching.service import CareerMatchingService

        try:
            catalog = CatalogService(settings=settings).load_catalog(parsed.catalog)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error loading catalog: {e}", file=sys.stderr)
            return 1

        overrides = {"max_results": parsed.top}
        if parsed.min_score is not None:
            overrides["minimum_score"] = parsed.min_score
        try:
            config = MatchingConfig(**overrides)
        except Exception as e:
            print(f"Error loading matching config: {e}", file=sys.stderr)
            return 1

        service = CareerMatchingService(config=config)
        matches = service.match_careers(profile, catalog.careers)
        if not matches:
            print("No careers matched.")
        for rank, match in enumerate(matches, start=1):
            print(f"#{rank} {service.format_match(match)}")
            print()

        if parsed.out is not None:
            try:
                parsed.out.parent.mkdir(parents=True, exist_ok=True)
                _write_json(parsed.out, [_match_payload(m) for m in matches])
            except OSError as e:
                print(f"Error writing matches: {e}", file=sys.stderr)
                return 1
            print(f"Wrote: {parsed.out}")
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
