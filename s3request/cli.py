"""Command-line interface for s3request.

Two subcommands expose the library for quick checks from a shell:

    s3request plan 1GiB                   # choose a part size
    s3request plan -1 --part-size 16MiB   # unknown size, streamed upload
    s3request canonical -H "Host: play.min.io" -q "uploads="
"""

import argparse
import json
import logging
import sys
from typing import Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from s3request.config import ConfigError, UploadSettings, load_settings, parse_size
from s3request.models import PartPlan
from s3request.multimap import Multimap
from s3request.multipart import calc_part_info

DEFAULT_CONFIG_PATH = "s3request.json"


def size_arg(text: str) -> int:
    """argparse type for sizes such as "5242880" or "16MiB"."""
    try:
        return parse_size(text)
    except ConfigError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def header_arg(text: str) -> tuple[str, str]:
    """argparse type for "Key: value" headers."""
    key, sep, value = text.partition(":")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"Invalid header {text!r}. Expected 'Key: value'")
    return key.strip(), value.lstrip()


def query_arg(text: str) -> tuple[str, str]:
    """argparse type for "key=value" query parameters."""
    key, _, value = text.partition("=")
    return key, value


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="s3request",
        description="Plan multipart uploads and canonicalize S3 request headers",
    )

    parser.add_argument(
        "-c", "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log planning decisions",
    )

    parser.add_argument(
        "-j", "--json",
        dest="json_output",
        action="store_true",
        help="Print results as JSON",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    plan_parser = subparsers.add_parser(
        "plan",
        help="Compute part size and part count for an upload",
    )
    plan_parser.add_argument(
        "object_size",
        type=size_arg,
        help="Object size in bytes or with a KiB/MiB/GiB/TiB unit; -1 if unknown",
    )
    plan_parser.add_argument(
        "-s", "--part-size",
        type=size_arg,
        default=None,
        help="Preferred part size (default: from config, else automatic)",
    )

    canonical_parser = subparsers.add_parser(
        "canonical",
        help="Print SigV4 canonical headers and query string",
    )
    canonical_parser.add_argument(
        "-H", "--header",
        dest="headers",
        type=header_arg,
        action="append",
        default=[],
        metavar="'KEY: VALUE'",
        help="Request header, may be repeated",
    )
    canonical_parser.add_argument(
        "-q", "--query",
        dest="query",
        type=query_arg,
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter, may be repeated",
    )

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def print_plan(plan: PartPlan, object_size: int, console: Console) -> None:
    """Render a successful plan as a table."""
    table = Table(show_header=False, box=box.ASCII, border_style="dim")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", no_wrap=True)

    table.add_row("Object size", "unknown" if object_size < 0 else str(object_size))
    table.add_row("Part size", str(plan.part_size))
    table.add_row("Part count", "unknown" if plan.unknown_count else str(plan.part_count))

    console.print(table)


def run_plan(args: argparse.Namespace, settings: UploadSettings, as_json: bool) -> int:
    """Run the plan subcommand."""
    part_size = args.part_size if args.part_size is not None else settings.part_size
    plan = calc_part_info(args.object_size, part_size)

    if not plan.ok:
        print(f"Planning error: {plan.error}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps({
            "object_size": args.object_size,
            "part_size": plan.part_size,
            "part_count": plan.part_count,
        }, indent=2))
    else:
        print_plan(plan, args.object_size, Console())

    return 0


def run_canonical(args: argparse.Namespace, as_json: bool) -> int:
    """Run the canonical subcommand."""
    headers = Multimap(args.headers)
    query = Multimap(args.query)

    signed_headers, canonical_headers = headers.get_canonical_headers()
    canonical_query = query.get_canonical_query_string()

    if as_json:
        print(json.dumps({
            "signed_headers": signed_headers,
            "canonical_headers": canonical_headers,
            "canonical_query_string": canonical_query,
        }, indent=2))
        return 0

    console = Console(soft_wrap=True)
    console.print("[bold]Signed headers[/bold]")
    console.print(signed_headers, markup=False, highlight=False)
    console.print("[bold]Canonical headers[/bold]")
    console.print(canonical_headers, markup=False, highlight=False)
    console.print("[bold]Canonical query string[/bold]")
    console.print(canonical_query, markup=False, highlight=False)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code: 0 for success, 1 for planning errors, 2 for config errors
    """
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    as_json = args.json_output or settings.json_output

    if args.command == "plan":
        return run_plan(args, settings, as_json)
    return run_canonical(args, as_json)


if __name__ == "__main__":
    sys.exit(main())
