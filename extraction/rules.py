"""
extraction/rules.py — zestaw reguł heurystyki (RuleSet) i jego ładowanie.

RuleSet zbiera wszystkie stałe heurystyk: frazy graniczne sekcji, glify,
wzorce regex, progi długości, próg wcięcia, prefiks id i kolejność strategii.
Dzięki temu heurystykę można dostroić bez zmian w kodzie, plikiem JSON
lokalnym lub pobieranym z URL (z cache na dysku, domyślnie 1 h).

Plik reguł:
  {
    "end_prefixes": ["完了", "アーカイブ"],
    "indent_threshold": 20,
    "strategy_order": ["text"]
  }
Klucze = nazwy pól RuleSet; brakujące pola przyjmują wartości domyślne.

Publiczne API:
  RuleSet, DEFAULT_RULES
  load_rules(source, cache_dir, ttl) -> RuleSet
"""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Callable

import requests

from extraction import markers
from extraction.errors import RulesError

log = logging.getLogger(__name__)

DEFAULT_TTL = 60 * 60
_CACHE_FILE = "rules.json"
_META_FILE = "rules.meta.json"
_HTTP_TIMEOUT = 30


@dataclass(frozen=True, slots=True)
class RuleSet:
    start_terms: tuple[str, ...] = markers.START_TERMS
    start_compact: str = markers.START_COMPACT
    start_bare: str = markers.START_BARE
    end_prefixes: tuple[str, ...] = markers.END_PREFIXES
    end_terms: tuple[str, ...] = markers.END_TERMS
    date_like_pattern: str = markers.DATE_LIKE_PATTERN
    search_pattern: str = markers.SEARCH_PATTERN
    trailing_date_pattern: str = markers.TRAILING_DATE_PATTERN
    bullet_glyphs: str = markers.BULLET_GLYPHS
    min_line_length: int = markers.MIN_LINE_LENGTH
    min_element_length: int = markers.MIN_ELEMENT_LENGTH
    min_text_title_length: int = markers.MIN_TEXT_TITLE_LENGTH
    min_geometry_title_length: int = markers.MIN_GEOMETRY_TITLE_LENGTH
    indent_threshold: float = markers.INDENT_THRESHOLD
    goal_id_prefix: str = markers.GOAL_ID_PREFIX
    strategy_order: tuple[str, ...] = markers.STRATEGY_ORDER
    min_content_length: int = markers.MIN_CONTENT_LENGTH
    poll_interval: float = markers.POLL_INTERVAL
    max_attempts: int = markers.MAX_ATTEMPTS

    def __post_init__(self) -> None:
        for name in ("date_like_pattern", "search_pattern", "trailing_date_pattern"):
            try:
                re.compile(getattr(self, name))
            except re.error as e:
                raise RulesError(f"Niepoprawny regex w polu {name}: {e}") from e
        if not self.start_terms:
            raise RulesError("start_terms nie może być puste.")
        if not self.strategy_order:
            raise RulesError("strategy_order nie może być puste.")

    # -- skompilowane wzorce (re trzyma własny cache) -----------------------

    @property
    def date_like_re(self) -> re.Pattern[str]:
        return re.compile(self.date_like_pattern)

    @property
    def search_re(self) -> re.Pattern[str]:
        return re.compile(self.search_pattern)

    @property
    def trailing_date_re(self) -> re.Pattern[str]:
        return re.compile(self.trailing_date_pattern)

    @property
    def leading_glyphs_re(self) -> re.Pattern[str]:
        return re.compile("^[" + re.escape(self.bullet_glyphs) + r"\s]+")

    # -- serializacja -------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RuleSet:
        if not isinstance(data, dict):
            raise RulesError("Plik reguł musi zawierać obiekt JSON.")
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise RulesError(f"Nieznane klucze w pliku reguł: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            default = getattr(DEFAULT_RULES, key)
            if isinstance(default, tuple):
                if isinstance(value, str) or not isinstance(value, list):
                    raise RulesError(f"Pole {key} musi być listą napisów.")
                value = tuple(str(v) for v in value)
            elif isinstance(value, bool) or not isinstance(value, type(default)):
                # int akceptujemy tam, gdzie domyślnie jest float; bool nigdzie
                if isinstance(value, bool) or not (isinstance(default, float) and isinstance(value, int)):
                    raise RulesError(
                        f"Pole {key}: oczekiwano {type(default).__name__}, "
                        f"otrzymano {type(value).__name__}."
                    )
                value = float(value)
            kwargs[key] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {k: list(v) if isinstance(v, tuple) else v for k, v in data.items()}


DEFAULT_RULES = RuleSet()


# ---------------------------------------------------------------------------
# Ładowanie
# ---------------------------------------------------------------------------

def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _parse(text: str, source: str) -> RuleSet:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RulesError(f"Plik reguł {source} nie jest poprawnym JSON: {e}") from e
    return RuleSet.from_dict(data)


def load_rules(
    source: str | Path | None,
    cache_dir: str | Path | None = None,
    ttl: float = DEFAULT_TTL,
    now: Callable[[], float] = time.time,
) -> RuleSet:
    """
    Zwraca RuleSet z pliku lokalnego lub URL.

    source=None        → DEFAULT_RULES
    ścieżka lokalna    → czytana bezpośrednio (bez cache)
    URL                → cache świeży (< ttl) wygrywa; w przeciwnym razie
                         pobranie przez requests i zapis cache. Gdy pobranie
                         się nie uda, używamy starego cache; bez cache → RulesError.
    """
    if source is None:
        return DEFAULT_RULES

    source = str(source)
    if not _is_url(source):
        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise RulesError(f"Nie można odczytać pliku reguł {path}: {e}") from e
        return _parse(text, source)

    cache = Path(cache_dir) if cache_dir is not None else None
    cached_text, fetched_at = _read_cache(cache, source)
    if cached_text is not None and now() - fetched_at < ttl:
        log.debug("Reguły z cache (%s)", source)
        return _parse(cached_text, source)

    try:
        resp = requests.get(source, timeout=_HTTP_TIMEOUT)
        resp.raise_for_status()
        text = resp.text
        rules = _parse(text, source)
    except (requests.RequestException, RulesError) as e:
        if cached_text is None:
            raise RulesError(f"Nie udało się pobrać reguł z {source}: {e}") from e
        log.warning("Pobranie reguł nie powiodło się (%s), używam starego cache.", e)
        return _parse(cached_text, source)

    _write_cache(cache, source, text, now())
    return rules


def _read_cache(cache: Path | None, source: str) -> tuple[str | None, float]:
    if cache is None:
        return None, 0.0
    try:
        meta = json.loads((cache / _META_FILE).read_text(encoding="utf-8"))
        if meta.get("source") != source:
            return None, 0.0
        text = (cache / _CACHE_FILE).read_text(encoding="utf-8")
    except (OSError, json.JSONDecodeError):
        return None, 0.0
    return text, float(meta.get("fetched_at", 0.0))


def _write_cache(cache: Path | None, source: str, text: str, fetched_at: float) -> None:
    if cache is None:
        return
    try:
        cache.mkdir(parents=True, exist_ok=True)
        (cache / _CACHE_FILE).write_text(text, encoding="utf-8")
        (cache / _META_FILE).write_text(
            json.dumps({"source": source, "fetched_at": fetched_at}),
            encoding="utf-8",
        )
    except OSError as e:
        log.warning("Nie udało się zapisać cache reguł w %s: %s", cache, e)
