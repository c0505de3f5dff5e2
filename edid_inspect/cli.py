# edid_inspect/cli.py
"""
cli.py

Rich console CLI:
- show:    decode an EDID binary file and print the nested text report.
- version: show the package version.
"""
from __future__ import annotations

import argparse
import os
from typing import Optional

from loguru import logger
from rich.console import Console

from edid_inspect import __version__
from edid_inspect.analysis.analyzer import EDIDAnalyzer
from edid_inspect.formats.edid.edid import EDIDParseError
from edid_inspect.logging import configure_logging
from edid_inspect.reporting.json_reporter import write_json
from edid_inspect.reporting.text_reporter import render_report

console = Console()


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="edid-inspect",
        description="EDID inspector: decode display identification data into a readable report.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    sub = p.add_subparsers(dest="cmd", title="Available Commands", metavar="<command>")

    sp_show = sub.add_parser("show", help="Decode a raw EDID file (e.g. /sys/class/drm/*/edid)")
    sp_show.add_argument("path", help="Path to the binary EDID dump")
    sp_show.add_argument(
        "--raw",
        action="store_true",
        help="Also print the raw video input, features and native DTD bytes in hex/binary",
    )
    sp_show.add_argument("--debug", action="store_true", help="Enable debug logging")
    sp_show.add_argument(
        "--json-out", type=str, default=None, help="Write the parsed record as JSON to this path"
    )

    sub.add_parser("version", help="Show the version of edid-inspect")

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.cmd == "version":
        console.print(f"edid-inspect version {__version__}")
        return 0

    if args.cmd == "show":
        configure_logging(debug=args.debug)
        path = args.path
        if not os.path.exists(path):
            console.print(f"[red]File not found:[/red] {path}")
            return 2

        try:
            edid = EDIDAnalyzer(path).run()
        except EDIDParseError as e:
            logger.debug("Parse failure for {path}: {error}", path=path, error=e)
            console.print(f"[red]Invalid EDID:[/red] {e}")
            return 1
        except OSError as e:
            console.print(f"[red]Could not read file:[/red] {e}")
            return 1

        console.print(f"{path}:", markup=False, highlight=False, soft_wrap=True)
        render_report(edid, raw=args.raw, console=console)

        if args.json_out:
            write_json(edid, args.json_out)
            console.print(f"[dim]Wrote JSON record → {args.json_out}[/dim]")

        return 0

    parser.print_help()
    return 1
