"""Entry point: python -m smartcopy <source-dir> <target-dir>"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from smartcopy.copying import copy_tree, prepare_roots, write_report
from smartcopy.infrastructure.config import COMPLETION_MESSAGE, PRESERVE_ATTRIBUTES, PROMPT_ON_OVERWRITE
from smartcopy.types import TraversalContext


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="smartcopy",
        description="Copy a directory tree, skipping files that are already up to date.",
    )
    parser.add_argument("source", type=Path, help="Source directory")
    parser.add_argument("target", type=Path, help="Target directory (created if missing)")
    parser.add_argument(
        "-i",
        "--interactive",
        action=argparse.BooleanOptionalAction,
        default=PROMPT_ON_OVERWRITE,
        help="Prompt before overwriting a file whose timestamp differs",
    )
    parser.add_argument(
        "--preserve",
        action=argparse.BooleanOptionalAction,
        default=PRESERVE_ATTRIBUTES,
        help="Copy permission bits and extended attributes too (--no-preserve: content and modification time only)",
    )
    parser.add_argument("--report", type=Path, help="Write a YAML run summary to this path")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        source, target = prepare_roots(args.source, args.target)
    except OSError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    context = TraversalContext(
        source_root=source,
        target_root=target,
        prompt_on_overwrite=args.interactive,
        preserve_attributes=args.preserve,
    )
    summary = copy_tree(context)

    if args.report is not None:
        try:
            write_report(summary, args.report)
        except OSError as exc:
            print(f"Unable to write report: {args.report}: {exc}", file=sys.stderr)
            return 1

    print(COMPLETION_MESSAGE)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
