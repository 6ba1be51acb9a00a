"""CLI entrypoint for rewriting elm-spa pages."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn, Optional, Tuple

from . import __version__
from .config import ConfigError, load_config
from .logging import configure_logging
from .models import Archetype
from .rewriter import PageRewriter
from .scanner import ParseError


class UsageError(Exception):
    """Raised when the path or template operand is missing."""


class _Parser(argparse.ArgumentParser):
    """Argument parser whose usage errors exit with status 1."""

    def error(self, message: str) -> NoReturn:
        self.exit(1, f"{self.prog}: {message}\nTry '{self.prog} --help' for more information.\n")


def _template(value: str) -> Optional[Archetype]:
    # Unknown templates are treated as absent and reported as a missing operand.
    return Archetype.from_name(value)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="spapage",
        description="Rewrite an elm-spa page module into a canonical page template.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Path to the page module to rewrite.",
    )
    parser.add_argument(
        "template",
        nargs="?",
        type=_template,
        help="Target page template. Options are - static|sandbox|element|advanced",
    )
    parser.add_argument(
        "-s",
        "--shared",
        action="store_true",
        default=None,
        help="Pass the shared model to the page functions.",
    )
    parser.add_argument(
        "-r",
        "--request",
        action="store_true",
        default=None,
        help="Pass the request object to the page functions.",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Print the result without overwriting the file.",
    )
    parser.add_argument(
        "--diff",
        action="store_true",
        help="Print a unified diff of the changes without overwriting the file.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a .spapage.yml file (defaults to the nearest one above PATH).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _operands(args: argparse.Namespace) -> Tuple[Path, Archetype]:
    if args.path is None or args.template is None:
        raise UsageError("missing operand\nTry 'spapage --help' for more information.")
    return Path(args.path), args.template


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for spapage."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        path, archetype = _operands(args)
    except UsageError as exc:
        parser.exit(1, f"spapage: {exc}\n")

    preview = bool(args.dry_run or args.diff)
    try:
        config = load_config(args.config) if args.config is not None else None
        outcome = PageRewriter(config).rewrite_file(
            path,
            archetype,
            shared=args.shared,
            request=args.request,
            dry_run=preview,
        )
    except ParseError as exc:
        parser.exit(1, f"spapage: {exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"spapage: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"spapage: {exc}\n")

    if args.diff:
        print(outcome.diff or "(no changes)")
    elif args.dry_run:
        print(outcome.text, end="")


if __name__ == "__main__":
    main(sys.argv[1:])
