"""Entry point for the Change Case CLI."""

from __future__ import annotations

import argparse
import sys

from . import __version__, platform
from .cases import CASES, convert
from .content import SOURCES, NoTextError, read_content
from .log import logger, setup_logging
from .preferences import ACTIONS, load_preferences


def _convert_directly(case: str, source: str) -> int:
    """Convert once and copy, leaving pinned and recent cases untouched."""
    try:
        content = read_content(source)
    except NoTextError:
        print(
            "Nothing to convert: please ensure that text is either selected or copied",
            file=sys.stderr,
        )
        return 1
    if not platform.copy_to_clipboard(convert(content, case)):
        print("Could not copy to the clipboard", file=sys.stderr)
        return 1
    print(f"Converted to {case}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run Change Case."""
    parser = argparse.ArgumentParser(
        prog="change-case",
        description="Convert clipboard or selected text to another case",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"change-case {__version__}",
    )
    parser.add_argument(
        "--case",
        "-c",
        type=str,
        help="Convert straight to this case and copy the result",
    )
    parser.add_argument(
        "--source",
        choices=SOURCES,
        help="Where to read text first (overrides preferences)",
    )
    parser.add_argument(
        "--action",
        choices=ACTIONS,
        help="What Enter does in the list (overrides preferences)",
    )
    parser.add_argument(
        "--list-cases",
        action="store_true",
        help="Print the supported cases and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Write debug output to the log file",
    )

    args = parser.parse_args(argv)

    if args.list_cases:
        print("\n".join(CASES))
        return 0

    if args.case is not None and args.case not in CASES:
        parser.error(f"unknown case {args.case!r} (see --list-cases)")

    setup_logging(platform.app_file("change-case.log"), verbose=args.verbose)

    prefs = load_preferences()
    if args.source:
        prefs.source = args.source
    if args.action:
        prefs.action = args.action

    if args.case is not None:
        return _convert_directly(args.case, prefs.source)

    try:
        from .app import run_app

        return run_app(prefs)
    except KeyboardInterrupt:
        return 130
    except Exception:
        logger.exception("Fatal error in change-case")
        raise


if __name__ == "__main__":
    sys.exit(main())
