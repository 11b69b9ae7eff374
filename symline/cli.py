"""Command-line front door for symline.

Generates tags for one file with the configured tag tool, then prints the
enclosing symbol for each requested line or the whole tag list.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .config import load_symline_config
from .session import TagSession
from .tags.locator import enclosing_tag


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the symbol enclosing a line, using ctags output.")
    parser.add_argument("path", help="Source file to tag.")
    parser.add_argument(
        "--line",
        dest="lines",
        type=_positive_int,
        action="append",
        default=[],
        metavar="N",
        help="Print the symbol enclosing line N (repeatable).",
    )
    parser.add_argument("--list", action="store_true", help="Print all tags as LINE<TAB>NAME.")
    parser.add_argument("--tool", default=None, help="Tag tool to run (default from config: ctags).")
    parser.add_argument(
        "--tool-arg",
        dest="tool_args",
        action="append",
        default=None,
        metavar="ARG",
        help="Extra tag tool argument, replaces configured arguments (repeatable).",
    )
    parser.add_argument("--timeout", type=float, default=30.0, help="Seconds to wait for the tag tool.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log generation details to stderr.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")

    config = load_symline_config()
    overrides: dict[str, object] = {"enable_generation": True}
    if args.tool is not None:
        overrides["tool_path"] = args.tool
    if args.tool_args is not None:
        overrides["tool_args"] = tuple(args.tool_args)
    config = dataclasses.replace(config, **overrides)

    session = TagSession(config)
    session.open_document(path, generate=False)
    run = session.generate(path)
    if run is None:
        print(f"symline: could not run {config.tool_path!r} on {path}", file=sys.stderr)
        return 1
    if not session.wait(run, timeout=args.timeout):
        print(f"symline: {config.tool_path!r} did not finish within {args.timeout}s", file=sys.stderr)
        return 1

    tags = session.tags(path)
    out: list[str] = []
    if args.list or not args.lines:
        out.extend(f"{record.line}\t{record.name}" for record in tags)
    for line in args.lines:
        record = enclosing_tag(tags, line)
        if record is None:
            out.append(f"{line}\t\t")
        else:
            out.append(f"{line}\t{record.name}\t{record.line}")
    if out:
        sys.stdout.write("\n".join(out) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
