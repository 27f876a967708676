"""Komenda: gsync rules — efektywny zestaw reguł heurystyki."""

from __future__ import annotations

import argparse
import json

from rich.console import Console
from rich.table import Table
from rich import box

from extraction.errors import RulesError
from gsync._config import get_settings
from gsync.commands.extract import _resolve_rules

console = Console()


def run(args: argparse.Namespace) -> None:
    settings = get_settings()
    source = args.rules or settings.rules

    try:
        rules = _resolve_rules(source, settings, refresh=args.refresh)
    except RulesError as e:
        console.print(f"[red]Błąd reguł:[/red] {e}")
        raise SystemExit(1)

    data = rules.to_dict()
    if args.json:
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("POLE", style="bold cyan", no_wrap=True)
    table.add_column("WARTOŚĆ", no_wrap=False)
    for key, value in data.items():
        shown = ", ".join(value) if isinstance(value, list) else str(value)
        table.add_row(key, shown)

    console.print(f"Źródło: [bold]{source or '(domyślne)'}[/bold]")
    console.print(table)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "rules",
        help="Pokazuje efektywny zestaw reguł (domyślne lub z pliku/URL).",
    )
    p.add_argument(
        "--rules",
        metavar="PLIK|URL",
        default=None,
        help="Plik reguł JSON (lokalny lub URL; domyślnie: $GOALSYNC_RULES).",
    )
    p.add_argument(
        "--refresh",
        action="store_true",
        help="Pomiń cache i pobierz reguły z URL ponownie.",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Wypisz reguły jako JSON.",
    )
    p.set_defaults(func=run)
