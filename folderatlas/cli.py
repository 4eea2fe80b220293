"""Command-line front end: folderatlas [PATH] [-d DEPTH] [--mode ...]."""
from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .drives import disk_usage_for, list_drives
from .models import MODE_STRUCTURAL, MODES, UNLIMITED, DepthPolicy
from .report import render_drives, render_report, usage_footer
from .scanner import InvalidRootError, scan_report
from .utils import parse_depth

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = UNLIMITED
LOG_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(verbose: int = 0, quiet: bool = False) -> None:
    pkg_logger = logging.getLogger("folderatlas")
    for h in list(pkg_logger.handlers):
        if getattr(h, "_folderatlas_cli", False):
            pkg_logger.removeHandler(h)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._folderatlas_cli = True
    pkg_logger.addHandler(handler)
    if quiet:
        pkg_logger.setLevel(logging.ERROR)
    elif verbose >= 2:
        pkg_logger.setLevel(logging.DEBUG)
    elif verbose == 1:
        pkg_logger.setLevel(logging.INFO)
    else:
        pkg_logger.setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="folderatlas",
        description="Report folder sizes under a directory, largest first within each folder.",
    )
    parser.add_argument("path", nargs="?", default=None,
                        help="Directory to scan (prompted for when omitted)")
    parser.add_argument("-d", "--depth", type=int, default=None,
                        help="Max depth, -1 for unlimited (default: -1)")
    parser.add_argument("--mode", choices=MODES, default=MODE_STRUCTURAL,
                        help="structural: stop descending at the depth limit; "
                             "display: scan everything, show only up to the limit")
    parser.add_argument("--follow-symlinks", action="store_true",
                        help="Descend into symlinked directories and count symlinked files")
    parser.add_argument("--drives", action="store_true",
                        help="List mounted drives and exit")
    parser.add_argument("--gui", action="store_true",
                        help="Open the desktop viewer")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("-v", "--verbose", action="count", default=0,
                       help="More log output (-vv for every skipped entry)")
    group.add_argument("-q", "--quiet", action="store_true",
                       help="Only log errors")
    return parser


def _prompt_inputs(args: argparse.Namespace, parser: argparse.ArgumentParser):
    if args.path is None:
        args.path = input("Enter the directory path to scan: ").strip()
        if args.depth is None:
            answer = input("Enter max depth (-1 for unlimited): ")
            try:
                args.depth = parse_depth(answer)
            except ValueError:
                parser.error(f"invalid depth: {answer!r}")
    if args.depth is None:
        args.depth = DEFAULT_DEPTH


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    if args.drives:
        print(render_drives(list_drives()))
        return 0

    if args.gui:
        from .app import run
        return run(args.path)

    _prompt_inputs(args, parser)
    policy = DepthPolicy(limit=parse_depth(args.depth), mode=args.mode)

    try:
        report = scan_report(args.path, policy, follow_symlinks=args.follow_symlinks)
    except InvalidRootError as e:
        logger.error("%s", e)
        return 1

    print(render_report(report))
    footer = usage_footer(disk_usage_for(report.root), report.root_size)
    if footer:
        print()
        print(footer)

    if report.stats.skipped:
        logger.warning("%d entries could not be read (%d permission denied); sizes may be undercounted",
                       report.stats.skipped, len(report.stats.permission_denied))
    return 0


if __name__ == "__main__":
    sys.exit(main())
