"""Handlers for the lql subcommands."""

import argparse
import json
import sys
from typing import NoReturn

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..classifier import classify_query
from ..config import LqlConfig, build_registry
from ..function_list import FunctionListError, dump_function_names, fetch_function_names
from ..highlighting import CATEGORY_STYLES, build_query_text
from ..scanner import scan


def _exit_with_error(message: str) -> NoReturn:
    """Print an error message and exit with status 1."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def read_query(args: argparse.Namespace) -> str:
    """Read the query from --file, the positional argument, or stdin.

    Args:
        args: Parsed arguments of the highlight/tokens subcommands.

    Returns:
        The query text.
    """
    if args.query_file:
        try:
            with open(args.query_file, encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            _exit_with_error(f"Could not read query file: {e}")
    if args.query == "-":
        return sys.stdin.read()
    return args.query


def handle_highlight_command(args: argparse.Namespace, config: LqlConfig) -> None:
    """Print the query with syntax highlighting."""
    query = read_query(args)
    text = build_query_text(query, build_registry(config), config.styles)
    Console().print(text, end="" if query.endswith("\n") else "\n")


def handle_tokens_command(args: argparse.Namespace, config: LqlConfig) -> None:
    """Print the classified tokens (or raw fragments) of the query."""
    query = read_query(args)

    if args.fragments:
        rows = [
            {
                "start": fragment.start,
                "end": fragment.end,
                "kind": fragment.kind.name.lower(),
                "text": fragment.text,
            }
            for fragment in scan(query)
        ]
        columns = ["start", "end", "kind", "text"]
    else:
        rows = [
            {
                "start": token.start,
                "end": token.end,
                "category": token.category.value,
                "context": token.context.value,
                "text": token.text,
            }
            for token in classify_query(query, build_registry(config))
        ]
        columns = ["start", "end", "category", "context", "text"]

    if args.format == "json":
        print(json.dumps(rows, indent=2))
        return

    styles = {**CATEGORY_STYLES, **config.styles}
    table = Table(show_header=True, header_style="bold")
    for column in columns:
        table.add_column(column)
    for row in rows:
        style = styles.get(str(row.get("category", "")), "") or None
        # Text cells so that brackets in the query aren't read as markup
        cells = [Text(repr(row[c]) if c == "text" else str(row[c])) for c in columns]
        table.add_row(*cells, style=style)
    Console().print(table)


def handle_functions_command(args: argparse.Namespace, config: LqlConfig) -> None:
    """List or refresh the known function names."""
    if args.functions_command == "list":
        names = sorted(build_registry(config).functions)
        if args.json:
            print(json.dumps(names, indent=2))
        else:
            for name in names:
                print(name)
        return

    # refresh
    url = args.url or config.reference_url
    try:
        names = fetch_function_names(url, timeout=args.timeout)
    except FunctionListError as e:
        _exit_with_error(str(e))
    if not names:
        _exit_with_error(f"No function names found at {url}")

    try:
        dump_function_names(names, args.output)
    except OSError as e:
        _exit_with_error(f"Could not write function list: {e}")
    print(f"Wrote {len(names)} function names to {args.output}")
