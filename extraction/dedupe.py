"""extraction/dedupe.py — usuwanie duplikatów z zachowaniem kolejności."""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, TypeVar

T = TypeVar("T")


def dedupe(items: Iterable[T], key: Callable[[T], Hashable] | None = None) -> list[T]:
    """
    Zostawia pierwsze wystąpienie każdego klucza (dokładne porównanie,
    z rozróżnianiem wielkości liter). Ten sam cel bywa wyrenderowany dwa
    razy (podsumowanie + wiersz szczegółów) — liczy się pierwszy.
    """
    seen: set[Hashable] = set()
    out: list[T] = []
    for item in items:
        k = key(item) if key is not None else item
        if k in seen:
            continue
        seen.add(k)
        out.append(item)
    return out
