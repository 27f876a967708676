"""Komenda: gsync watch — cykliczna synchronizacja celów."""

from __future__ import annotations

import argparse
import time

from rich.console import Console

from extraction.errors import GoalSyncError, NavigationError, SessionContextError, TransportError
from gsync._config import get_settings
from gsync.commands.extract import _make_session, add_common_arguments

console = Console(stderr=True)

# Podmieniane w testach.
_sleep = time.sleep


def run(args: argparse.Namespace) -> None:
    settings = get_settings()
    interval = args.interval if args.interval is not None else settings.poll_interval
    initial = args.initial_delay if args.initial_delay is not None else settings.initial_delay

    try:
        session = _make_session(args, settings)
        session.open()
    except GoalSyncError as e:
        console.print(f"[red]Błąd:[/red] {e}")
        raise SystemExit(1)

    console.print(
        f"Synchronizacja [bold]{args.source}[/bold] co {interval:.0f}s "
        f"(pierwszy przebieg za {initial:.0f}s). Ctrl+C kończy."
    )

    done = 0
    try:
        _sleep(initial)
        while True:
            try:
                goals = session.fetch() if done == 0 else session.reload()
                console.print(f"[dim]{time.strftime('%H:%M:%S')}[/dim] {len(goals)} celów")
            except SessionContextError as e:
                console.print(f"[red]Błąd:[/red] {e}")
                raise SystemExit(1)
            except (NavigationError, TransportError) as e:
                # Jak w aplikacji: błąd pojedynczego przebiegu nie przerywa cyklu.
                console.print(f"[yellow]Przebieg nieudany:[/yellow] {e}")

            done += 1
            if args.count is not None and done >= args.count:
                break
            _sleep(interval)
    except KeyboardInterrupt:
        console.print("\nZatrzymano.")
    finally:
        session.close()


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "watch",
        help="Cykliczna synchronizacja: przebieg ekstrakcji co N sekund.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Otwiera sesję strony i co --interval sekund przeładowuje ją i uruchamia
przebieg ekstrakcji. Błędy nawigacji/transportu pojedynczego przebiegu
są zgłaszane, ale cykl trwa dalej.

Przykłady:
  gsync watch https://example.com/goals --out http
  gsync watch zrzut.json --interval 30 --count 10
        """,
    )
    add_common_arguments(p)
    p.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Odstęp między przebiegami w sekundach (domyślnie: $GOALSYNC_POLL_INTERVAL lub 60).",
    )
    p.add_argument(
        "--initial-delay",
        type=float,
        default=None,
        help="Opóźnienie pierwszego przebiegu (domyślnie: $GOALSYNC_INITIAL_DELAY lub 5).",
    )
    p.add_argument(
        "--count",
        type=int,
        default=None,
        help="Zakończ po N przebiegach (domyślnie: bez końca).",
    )
    p.set_defaults(func=run)
