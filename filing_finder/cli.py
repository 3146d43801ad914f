"""Command-line interface for the filing finder."""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date

from filing_finder.client import DEFAULT_USER_AGENT, SubmissionsClient
from filing_finder.directory import fetch_ticker_directory, load_ticker_directory
from filing_finder.errors import FilingFinderError
from filing_finder.models import DEFAULT_CATEGORIES, DEFAULT_PER_CATEGORY_LIMIT, FilingSelection, PipelineResult
from filing_finder.pipeline import FilingPipeline

CHART_URL = "https://www.tradingview.com/chart/?symbol={symbol}"


def print_chart_link(symbol: str) -> None:
    """Show the price chart link for a ticker on stderr."""
    print(f"Chart: {CHART_URL.format(symbol=symbol)}", file=sys.stderr)


def format_filing_table(result: PipelineResult) -> str:
    """Format selected filings as a simple table."""
    if result.is_empty:
        return "No filings found."

    lines = []
    lines.append(f"{'Form':<10} {'Date':<12} {'Link'}")
    lines.append("-" * 80)

    for filing in result.filings:
        lines.append(
            f"{filing.form_type:<10} {str(filing.filing_date):<12} {result.document_url(filing)}"
        )

    return "\n".join(lines)


def format_json(result: PipelineResult) -> str:
    """Format the ticker, CIK and selected filings (with links) as JSON."""
    output = {
        "ticker": result.ticker,
        "cik": result.identifier,
        "filings": [
            {
                "form_type": f.form_type,
                "filing_date": str(f.filing_date),
                "accession_number": f.accession_number,
                "primary_document": f.primary_document,
                "url": result.document_url(f),
            }
            for f in result.filings
        ],
    }
    return json.dumps(output, indent=2)


def parse_date(value: str | None, option: str) -> date | None:
    """
    Parse a YYYY-MM-DD option value, exiting with an error if it is malformed.

    Args:
        value: Raw option value, or None when the option was not given
        option: Option name used in the error message

    Returns:
        The parsed date, or None
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        print(f"Error: Invalid date format for {option}: {value}", file=sys.stderr)
        print("Expected format: YYYY-MM-DD", file=sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the filing-finder command."""
    parser = argparse.ArgumentParser(
        description="Find the latest SEC filings for a company by ticker symbol"
    )
    parser.add_argument(
        "ticker",
        help="Stock ticker symbol (e.g., AAPL, MSFT)"
    )
    parser.add_argument(
        "--form",
        dest="form_types",
        action="append",
        help=f"Form type to list (default: {', '.join(DEFAULT_CATEGORIES)}). Can be specified multiple times."
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_PER_CATEGORY_LIMIT,
        help=f"Maximum filings per form type (default: {DEFAULT_PER_CATEGORY_LIMIT})"
    )
    parser.add_argument(
        "--date-from",
        type=str,
        help="Only filings from this date (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--date-to",
        type=str,
        help="Only filings up to this date (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--tickers-file",
        help="Local company_tickers.json (default: download from sec.gov)"
    )
    parser.add_argument(
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="User-Agent sent to sec.gov, e.g. 'Your Name (you@example.com)'"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log progress to stderr"
    )
    return parser


async def run(args: argparse.Namespace, selection: FilingSelection) -> PipelineResult:
    """
    Load the ticker directory and run the pipeline for the requested ticker.

    Args:
        args: Parsed command-line arguments
        selection: Filing selection built from the options

    Returns:
        The pipeline result

    Raises:
        FilingFinderError: If loading or any pipeline step fails
    """
    if args.tickers_file:
        directory = load_ticker_directory(args.tickers_file)
    else:
        directory = await fetch_ticker_directory(user_agent=args.user_agent)

    pipeline = FilingPipeline(
        directory,
        SubmissionsClient(user_agent=args.user_agent),
        selection=selection,
        chart_notifier=print_chart_link,
    )
    return await pipeline.run(args.ticker)


def main(argv: list[str] | None = None) -> None:
    """
    Main CLI entry point.

    Usage: python -m filing_finder.cli AAPL --form 10-K --limit 3
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.user_agent.isascii():
        # HTTP header values must be ASCII
        print("Error: --user-agent must contain only ASCII characters", file=sys.stderr)
        sys.exit(1)

    if args.limit < 0:
        print("Error: --limit must not be negative", file=sys.stderr)
        sys.exit(1)

    selection = FilingSelection(
        categories=args.form_types or list(DEFAULT_CATEGORIES),
        per_category_limit=args.limit,
        date_from=parse_date(args.date_from, "--date-from"),
        date_to=parse_date(args.date_to, "--date-to"),
    )

    try:
        result = asyncio.run(run(args, selection))
    except FilingFinderError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error loading ticker data: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(format_json(result))
    else:
        print(f"\nTicker: {result.ticker}")
        print(f"CIK: {result.identifier}\n")
        print(format_filing_table(result))


if __name__ == "__main__":
    main()
