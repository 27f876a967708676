"""
extraction/normalizer.py — oczyszczanie surowego tekstu kandydata do tytułu.

normalize():
  1. usuwa doklejony na końcu termin („ ~3/25 14:30”),
  2. usuwa wiodące glify (▶ ○ ● ■ …) razem z białymi znakami,
  3. strip().

Kolejność kroków ma znaczenie: glif może stać przed tekstem, który kończy
się terminem. Funkcja nigdy nie odrzuca; za zbyt krótki wynik odpowiada
wywołujący (min_*_title_length w RuleSet).
"""

from __future__ import annotations

from extraction.rules import DEFAULT_RULES, RuleSet


def normalize(text: str, rules: RuleSet = DEFAULT_RULES) -> str:
    """Zwraca oczyszczony tytuł, np. "▶ Finish report ~3/25 14:30" → "Finish report"."""
    t = rules.trailing_date_re.sub("", text)
    t = rules.leading_glyphs_re.sub("", t)
    return t.strip()
