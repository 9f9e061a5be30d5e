# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial

from __future__ import annotations

import argparse
import sys
from typing import BinaryIO

from bytebuf import DEFAULT_UNIT, AllocationFailure, Buf, InvalidConstruction

READ_CHUNK = 65_536


def parse_slice(text: str) -> tuple[int, int | None]:
    """Parse ``BEGIN`` or ``BEGIN:END`` into slice bounds."""
    begin, sep, end = text.partition(":")
    try:
        return int(begin), (int(end) if sep and end else None)
    except ValueError as error:
        raise ValueError(f"invalid slice: {text!r}") from error


def load(stream: BinaryIO, unit: int) -> Buf:
    buf = Buf(unit)
    while chunk := stream.read(READ_CHUNK):
        buf.append_bytes(chunk)
    return buf


def inspect_one(path: str, args: argparse.Namespace) -> Buf:
    if path == "-":
        buf = load(sys.stdin.buffer, args.unit)
    else:
        with open(path, "rb") as file:
            buf = load(file, args.unit)

    if args.slice is not None:
        buf = buf.slice(*parse_slice(args.slice))
    if args.length is not None:
        buf.set_length(args.length)
    return buf


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load files into growable buffers and print a short summary."
    )
    parser.add_argument("paths", nargs="*", default=["-"], help="Files to load ('-' for stdin).")
    parser.add_argument(
        "--unit",
        type=int,
        default=DEFAULT_UNIT,
        help=f"Buffer growth unit in bytes (default: {DEFAULT_UNIT}).",
    )
    parser.add_argument(
        "--slice",
        help="Keep only BEGIN[:END]; negative indices count from the end (e.g. --slice=-3:-1).",
    )
    parser.add_argument("--length", type=int, help="Truncate or space-pad to this length.")
    parser.add_argument("--raw", action="store_true", help="Write buffer bytes instead of a summary.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    for path in args.paths:
        try:
            buf = inspect_one(path, args)
        except (InvalidConstruction, AllocationFailure, ValueError) as error:
            print(f"[error] {error}", file=sys.stderr)
            return 1
        except FileNotFoundError as error:
            print(f"[error] {error}", file=sys.stderr)
            return 1

        if args.raw:
            sys.stdout.buffer.write(bytes(buf))
            sys.stdout.flush()
        else:
            label = "" if len(args.paths) == 1 else f"{path}: "
            print(f"{label}{buf.inspect_summary()}")

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
