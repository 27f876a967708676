"""Komenda: gsync decode — ładunek (lub URL odbiornika) → lista celów."""

from __future__ import annotations

import argparse

from rich.console import Console

from extraction.errors import PayloadError
from gsync.commands.extract import _show_goals
from transport.emitter import decode_payload, goals_to_json

console = Console()


def run(args: argparse.Namespace) -> None:
    try:
        goals = decode_payload(args.payload)
    except PayloadError as e:
        console.print(f"[red]Błąd dekodowania:[/red] {e}")
        raise SystemExit(1)

    if args.json:
        print(goals_to_json(goals))
        return
    _show_goals(goals, console)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "decode",
        help="Dekoduje ładunek percent-encoded (lub URL odbiornika) do listy celów.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Przykłady:
  gsync decode '%5B%5D'
  gsync decode 'http://localhost:19837?data=%5B%7B%22id%22...' --json
        """,
    )
    p.add_argument(
        "payload",
        metavar="ŁADUNEK",
        help="Ładunek percent-encoded albo pełny URL z parametrem data.",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Wypisz zdekodowany JSON zamiast tabeli.",
    )
    p.set_defaults(func=run)
