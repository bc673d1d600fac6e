"""Search command module - searches chests and prints grouped rows."""

import argparse

from services.search_service import aggregate_results
from ..utils.config_helpers import args_to_config, create_registry
from ..utils.output import OutputFormatter, format_search_rows


async def search_command(args: argparse.Namespace) -> None:
    """Execute the search command.

    Args:
        args: Parsed command-line arguments
    """
    formatter = OutputFormatter(verbose=args.verbose)
    search_service = create_registry(args_to_config(args)).create_search_service()

    results = search_service.search(args.query)
    rows = aggregate_results(results)

    if args.json:
        formatter.json_output([row.to_dict() for row in rows])
        return

    if not rows:
        formatter.info("No matching results.")
        return

    formatter.verbose_info(f"{len(results)} results, {len(rows)} rows")
    for line in format_search_rows(rows):
        print(line)
