"""Main entry point for the lql CLI tool."""

import logging
import sys
from typing import NoReturn

from ..config import load_lql_config
from .handlers import (
    handle_functions_command,
    handle_highlight_command,
    handle_tokens_command,
)
from .parser import create_parser

logger = logging.getLogger(__name__)


def main() -> NoReturn:
    """Main entry point for the lql CLI tool."""
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_lql_config()
    logger.debug(f"Loaded config: {config}")

    # =========================================================================
    # COMMAND HANDLERS (keep sorted alphabetically to match parser order)
    # =========================================================================

    # --- functions ---
    if args.command == "functions":
        handle_functions_command(args, config)

    # --- highlight ---
    if args.command == "highlight":
        handle_highlight_command(args, config)

    # --- tokens ---
    if args.command == "tokens":
        handle_tokens_command(args, config)

    sys.exit(0)


if __name__ == "__main__":
    main()
