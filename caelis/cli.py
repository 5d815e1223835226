"""Command line entry point: parse a source file and print its definitions."""

from __future__ import annotations

import argparse
import pprint
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from caelis.lexer import LexError, tokenize
from caelis.parser import ParseError, parse


def _location(source: str, offset: int) -> tuple[int, int, int, int]:
    """Return line number, column, and the bounds of the line holding ``offset``."""
    offset = min(offset, len(source))
    line_no = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    line_end = source.find("\n", offset)
    if line_end == -1:
        line_end = len(source)
    return line_no, offset - line_start + 1, line_start, line_end


def format_error(filename: str, source: str, error: Union[LexError, ParseError]) -> str:
    """Render ``error`` as a report pointing into ``source``."""
    span = error.span
    line_no, column, line_start, line_end = _location(source, span.start)
    start = min(span.start, len(source))
    width = max(1, min(span.end, line_end) - start)
    gutter = " " * len(str(line_no))
    lines = [
        f"Error: {error}",
        f"{gutter}--> {filename}:{line_no}:{column}",
        f"{gutter} |",
        f"{line_no} | {source[line_start:line_end]}",
        f"{gutter} | {' ' * (start - line_start)}{'^' * width} {error.reason}",
    ]
    for label, context in getattr(error, "contexts", ()):
        ctx_line, ctx_column, _, _ = _location(source, context.start)
        lines.append(f"{gutter} = while parsing this {label} at {ctx_line}:{ctx_column}")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse the file named on the command line; return the exit status."""
    arg_parser = argparse.ArgumentParser(
        prog="caelis", description="Parse a caelis source file and print its definitions."
    )
    arg_parser.add_argument("file", help="source file to parse")
    args = arg_parser.parse_args(argv)

    try:
        source = Path(args.file).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"caelis: failed to read {args.file}: {exc}", file=sys.stderr)
        return 1

    try:
        defs = parse(tokenize(source))
    except (LexError, ParseError) as exc:
        print(format_error(args.file, source, exc), file=sys.stderr)
        return 1

    print(pprint.pformat(list(defs)))
    return 0


if __name__ == "__main__":
    sys.exit(main())