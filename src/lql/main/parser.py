"""Argument parser creation for the lql CLI tool."""

import argparse

from .. import __version__


def _add_query_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the query source arguments shared by highlight and tokens."""
    parser.add_argument(
        "query",
        nargs="?",
        default="-",
        help="LogScale query to classify (default: '-' to read from stdin). "
        "Examples: 'status=200 | count()', 'groupBy(field=host)'",
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="query_file",
        help="Read the query from this file instead of the command line.",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        description="lql - LogScale query syntax classifier and highlighter",
        prog="lql",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    # Top-level subparsers
    top_level_subparsers = parser.add_subparsers(
        dest="command", help="Available commands", required=True
    )

    # =========================================================================
    # TOP-LEVEL SUBCOMMANDS (keep sorted alphabetically)
    # =========================================================================

    # --- functions ---
    functions_parser = top_level_subparsers.add_parser(
        "functions",
        help="Inspect or refresh the list of known function names",
    )
    functions_subparsers = functions_parser.add_subparsers(
        dest="functions_command", help="Function list commands", required=True
    )

    functions_list_parser = functions_subparsers.add_parser(
        "list",
        help="Print the function names used for highlighting",
    )
    functions_list_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the names as a JSON array.",
    )

    functions_refresh_parser = functions_subparsers.add_parser(
        "refresh",
        help="Scrape the LogScale function reference and write a function list",
    )
    # Options for 'functions refresh' (keep sorted alphabetically by long option name)
    functions_refresh_parser.add_argument(
        "-o",
        "--output",
        default="~/.config/lql/functions.yml",
        help="Where to write the function list (default: ~/.config/lql/functions.yml). "
        "Point 'functions_file' in lql.yml at it to use it.",
    )
    functions_refresh_parser.add_argument(
        "--timeout",
        type=float,
        default=30,
        help="Request timeout in seconds (default: 30)",
    )
    functions_refresh_parser.add_argument(
        "--url",
        help="Function reference URL (default: 'reference_url' from lql.yml).",
    )

    # --- highlight ---
    highlight_parser = top_level_subparsers.add_parser(
        "highlight",
        help="Print a query with syntax highlighting",
    )
    _add_query_arguments(highlight_parser)

    # --- tokens ---
    tokens_parser = top_level_subparsers.add_parser(
        "tokens",
        help="Print the classified tokens of a query",
    )
    _add_query_arguments(tokens_parser)
    # Options for 'tokens' (keep sorted alphabetically by long option name)
    tokens_parser.add_argument(
        "--format",
        choices=["json", "rich"],
        default="rich",
        help="Output format (default: rich)",
    )
    tokens_parser.add_argument(
        "--fragments",
        action="store_true",
        help="Print raw scanner fragments (whitespace included) instead of "
        "classified tokens.",
    )

    return parser
