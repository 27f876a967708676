"""
gsync — narzędzie CLI dla GoalSync.

Użycie:
  gsync [-v] <komenda> [opcje]

Komendy:
  extract   Jeden przebieg ekstrakcji celów ze strony (URL, plik HTML, zrzut JSON).
  watch     Cykliczna synchronizacja: przebieg co N sekund.
  decode    Dekoduje ładunek (lub URL odbiornika) do listy celów.
  rules     Pokazuje efektywny zestaw reguł heurystyki.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from gsync.commands import extract as cmd_extract
from gsync.commands import watch as cmd_watch
from gsync.commands import decode as cmd_decode
from gsync.commands import rules as cmd_rules


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gsync",
        description="GoalSync — ekstrakcja celów ze strony bez API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="gsync 0.1.0"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Logi diagnostyczne (DEBUG).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_extract.add_parser(subparsers)
    cmd_watch.add_parser(subparsers)
    cmd_decode.add_parser(subparsers)
    cmd_rules.add_parser(subparsers)

    return parser


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def main(argv: list[str] | None = None) -> None:
    # Windows: terminal może używać cp1252, a japońskie frazy i glify
    # muszą wyjść poprawnie.
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8", errors="replace")

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
