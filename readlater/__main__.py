"""CLI entry point: python -m readlater [FILE] [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from readlater.items import ExtractionResult, Fidelity
from readlater.profiles import ExtractorConfig, load_profile
from readlater.query import ExtractionUnavailable, parse
from readlater.settings import DEFAULT_PARSER
from readlater.tree import PARSER_BACKENDS

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readlater",
        description=(
            "Extract the readable article from an HTML page.\n"
            "Reads FILE (or stdin) and prints the extracted record."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", nargs="?", default="-", metavar="FILE",
                        help="HTML file to read, or '-' for stdin (default: -)")
    parser.add_argument("--url", default="", metavar="URL",
                        help="Page URL recorded in the result")
    parser.add_argument("--selection", default=None, metavar="TEXT",
                        help="Highlighted text that overrides the detected content")
    parser.add_argument("--fidelity", choices=[f.value for f in Fidelity], default=None,
                        help="basic skips word count and extended metadata "
                             "(default: from profile, else full)")
    parser.add_argument("--profile", default=None, metavar="YAML",
                        help="YAML extraction profile")
    parser.add_argument("--parser", choices=PARSER_BACKENDS, default=DEFAULT_PARSER,
                        help=f"Tree backend (default: {DEFAULT_PARSER})")
    parser.add_argument("--format", choices=["json", "text"], default="json",
                        help="Output format (default: json)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False)],
        force=True,
    )


def _read_input(file_arg: str) -> str:
    if file_arg == "-":
        return sys.stdin.read()
    return Path(file_arg).read_text(encoding="utf-8", errors="replace")


def _print_table(result: ExtractionResult, console: Console) -> None:
    table = Table(box=box.SIMPLE, show_header=False, title=result.title)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value", overflow="fold")

    table.add_row("URL", result.url or "-")
    table.add_row("Summary", result.summary or "-")
    table.add_row("Tags", ", ".join(result.tags) or "-")
    for key, value in result.metadata.model_dump(by_alias=True, exclude_none=True).items():
        table.add_row(key, str(value))
    console.print(table)
    console.rule("Content")
    console.print(result.content, markup=False, highlight=False)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    try:
        config = load_profile(args.profile, args.url) if args.profile else ExtractorConfig()
    except (OSError, ValueError, ValidationError) as exc:
        print(f"ERROR: Could not load profile {args.profile}: {exc}", file=sys.stderr)
        return 1

    try:
        html = _read_input(args.file)
    except OSError as exc:
        print(f"ERROR: Could not read {args.file}: {exc}", file=sys.stderr)
        return 1

    try:
        result = parse(
            html,
            url=args.url,
            selection=args.selection,
            fidelity=args.fidelity,
            config=config,
            parser=args.parser,
        )
    except ExtractionUnavailable as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(result.to_payload(), indent=2, ensure_ascii=False))
    else:
        _print_table(result, Console())
    return 0


if __name__ == "__main__":
    sys.exit(main())
