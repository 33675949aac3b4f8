"""
Command line interface for the Structured Data Scraper.
Subcommands: analyze (extract or generate) and validate (check a saved file).
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from structured_data_scraper.config import config
from structured_data_scraper.layers.analysis import build_analysis_layer
from structured_data_scraper.layers.validation import ConformanceValidator
from structured_data_scraper.utils.logger import get_logger, set_trace_id

logger = get_logger("cli")


def register_analyze(parser: argparse.ArgumentParser) -> None:
    """
    Analyze a website: extract its structured data or generate it if missing.
    """
    parser.add_argument("url", type=str, help="Website URL to analyze")
    parser.add_argument("-o", "--output", type=str, default=config.OUTPUT_DIR, help="Output directory for JSON files")
    parser.add_argument("-f", "--force", action="store_true", help="Force generation even if structured data exists")
    parser.add_argument("--api-key", type=str, default=None, help="Claude API key for content generation")

    def func(args: argparse.Namespace) -> int:
        layer = build_analysis_layer(api_key=args.api_key, output_dir=args.output)
        result = asyncio.run(layer.analyze(args.url, force=args.force))

        if not result.success:
            print(f"Analysis failed: {result.error}")
            return 1

        print(f"Analysis completed! File saved to: {result.output_path}")
        print(f"Found {result.structured_data_count} structured data entries")
        if result.generated:
            print(f"Generated new structured data ({result.strategy.value})")
        return 0

    parser.set_defaults(func=func)


def register_validate(parser: argparse.ArgumentParser) -> None:
    """
    Validate structured data saved by a previous analysis.
    """
    parser.add_argument("file", type=str, help="JSON file to validate")

    def func(args: argparse.Namespace) -> int:
        try:
            report = ConformanceValidator().validate_file(args.file)
        except (OSError, ValueError, TypeError) as e:
            print(f"Validation failed: {e}")
            return 1

        for outcome in report.per_item:
            status = "valid" if outcome.valid else "INVALID"
            print(f"[{outcome.index}] {outcome.type or 'Unknown'}: {status}")
            for error in outcome.errors:
                print(f"    error: {error}")
            for warning in outcome.warnings:
                print(f"    warning: {warning}")

        print(f"Validation summary: {report.valid_count}/{report.total_count} items valid")
        return 0 if report.valid else 1

    parser.set_defaults(func=func)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="structured-data-scraper",
        description="Extract or generate structured data from websites",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    register_analyze(subparsers.add_parser("analyze", help="Analyze a website for structured data"))
    register_validate(subparsers.add_parser("validate", help="Validate structured data from a JSON file"))
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    set_trace_id()
    logger.info("cli_command", command=args.command)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
