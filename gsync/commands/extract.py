"""Komenda: gsync extract — jeden przebieg ekstrakcji celów."""

from __future__ import annotations

import argparse
import dataclasses
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich import box

from data_model.goals import GoalList
from extraction.errors import GoalSyncError
from extraction.rules import RuleSet, load_rules
from gsync._config import Settings, get_settings
from gsync.session import SyncSession
from page.snapshot import open_page
from transport.emitter import (
    CallbackTransport,
    HttpTransport,
    ResultEmitter,
    StdoutTransport,
    Transport,
    goals_to_json,
)

# Komunikaty na stderr — stdout należy do ładunku (--out stdout).
console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Wspólne dla extract / watch
# ---------------------------------------------------------------------------

def _resolve_rules(
    source: str | None,
    settings: Settings,
    refresh: bool = False,
) -> RuleSet:
    return load_rules(
        source,
        cache_dir=settings.cache_dir,
        ttl=0 if refresh else settings.rules_ttl,
    )


def _apply_overrides(rules: RuleSet, args: argparse.Namespace) -> RuleSet:
    changes = {}
    if getattr(args, "min_length", None) is not None:
        changes["min_content_length"] = args.min_length
    if getattr(args, "attempts", None) is not None:
        changes["max_attempts"] = args.attempts
    return dataclasses.replace(rules, **changes) if changes else rules


def _make_transport(out: str, receiver: str | None, settings: Settings) -> Transport:
    if out == "http":
        return HttpTransport(receiver or settings.receiver_url)
    if out == "none":
        return CallbackTransport(lambda payload: None)
    return StdoutTransport()


def _make_session(args: argparse.Namespace, settings: Settings) -> SyncSession:
    rules = _apply_overrides(_resolve_rules(args.rules or settings.rules, settings), args)
    transport = _make_transport(args.out, args.receiver, settings)
    source: str = args.source
    return SyncSession(lambda: open_page(source), ResultEmitter(transport), rules)


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_goals(goals: GoalList, out: Console | None = None) -> None:
    out = out or console
    if not goals:
        out.print("[yellow]Brak celów.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("ID",     no_wrap=True, style="bold cyan")
    table.add_column("RODZIC", no_wrap=True, style="dim")
    table.add_column("✓",      justify="center", no_wrap=True)
    table.add_column("TYTUŁ",  no_wrap=False, max_width=60)

    for goal in goals:
        indent = "  " if goal.parent_id else ""
        table.add_row(
            goal.id,
            goal.parent_id or "-",
            "[green]✓[/green]" if goal.completed else "",
            indent + goal.title,
        )

    out.print()
    out.print(table)
    out.print(f"  [dim]{len(goals)} celów[/dim]\n")


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    settings = get_settings()

    try:
        session = _make_session(args, settings)
        console.print(f"Pobieranie [bold]{args.source}[/bold] …")
        session.open()
        goals = session.fetch()
    except GoalSyncError as e:
        console.print(f"[red]Błąd:[/red] {e}")
        raise SystemExit(1)

    console.print(f"Znaleziono [bold]{len(goals)}[/bold] celów.")

    if args.save:
        Path(args.save).write_text(goals_to_json(goals), encoding="utf-8")
        console.print(f"[green]JSON:[/green] {args.save}")

    if args.show:
        _show_goals(goals)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "source",
        metavar="ŹRÓDŁO",
        help="URL strony, plik HTML lub zrzut JSON (*.json).",
    )
    p.add_argument(
        "--rules",
        metavar="PLIK|URL",
        default=None,
        help="Plik reguł JSON (lokalny lub URL; domyślnie: $GOALSYNC_RULES).",
    )
    p.add_argument(
        "--out",
        choices=["stdout", "http", "none"],
        default="stdout",
        help="Dostarczenie wyniku: stdout, http (odbiornik) lub none (domyślnie: stdout).",
    )
    p.add_argument(
        "--receiver",
        metavar="URL",
        default=None,
        help="URL odbiornika dla --out http (domyślnie: $GOALSYNC_RECEIVER_URL).",
    )
    p.add_argument(
        "--min-length",
        type=int,
        default=None,
        help="Próg gotowości: minimalna długość tekstu strony.",
    )
    p.add_argument(
        "--attempts",
        type=int,
        default=None,
        help="Maks. liczba prób bramki gotowości.",
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "extract",
        help="Jeden przebieg ekstrakcji celów ze strony.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Czeka na gotowość treści, wyciąga cele sekcji „今やるべきゴール”
(najpierw strategia geometryczna, potem tekstowa) i dostarcza wynik.

Przykłady:
  gsync extract strona.html --show
  gsync extract zrzut.json --out http
  gsync extract https://example.com/goals --rules reguly.json --out none --show
        """,
    )
    add_common_arguments(p)
    p.add_argument(
        "--save",
        metavar="PLIK",
        default=None,
        help="Zapisz wynik jako JSON do pliku.",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę celów w terminalu.",
    )
    p.set_defaults(func=run)
