"""
extraction/markers.py — domyślne frazy graniczne, glify i wzorce regex.

Strona celów nie ma semantycznego znacznika sekcji; jedynym stabilnym
sygnałem są frazy nagłówków. Obie strategie (geometryczna i tekstowa)
korzystają z tego samego słownika, żeby fallback zachowywał się spójnie.

Wartości tutaj to tylko domyślne ustawienia RuleSet (extraction/rules.py);
plik reguł JSON może je nadpisać.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Początek sekcji „cele do zrobienia teraz”
# ---------------------------------------------------------------------------

# Wszystkie muszą wystąpić w tekście nagłówka.
START_TERMS: tuple[str, ...] = ("ゴール", "やるべき")

# Zwarta forma nagłówka (porównanie dokładne po strip()).
START_COMPACT = "今やるべきゴール"

# Goły nagłówek „ゴール” — tylko strategia tekstowa.
START_BARE = "ゴール"

# ---------------------------------------------------------------------------
# Koniec sekcji: ukończone / archiwum / nawyki / rezultaty / lista celów
# ---------------------------------------------------------------------------

# Strategia tekstowa: linia ZACZYNA SIĘ od frazy.
END_PREFIXES: tuple[str, ...] = ("完了", "アーカイブ", "習慣", "成果", "ゴール一覧")

# Strategia geometryczna: tekst elementu ZAWIERA frazę.
END_TERMS: tuple[str, ...] = ("完了", "アーカイブ", "成果", "習慣", "ゴール一覧")

# ---------------------------------------------------------------------------
# Wzorce filtrów i normalizacji
# ---------------------------------------------------------------------------

# Zakres dat: „〜3/25”, „~ 12”, „3/25 …”. Tylko cyfry ASCII: „〜３月までに” to cel.
DATE_LIKE_PATTERN = r"^[〜~]\s*[0-9]|^[0-9]{1,2}/[0-9]{1,2}"

# Pole wyszukiwania: „検索…” albo „Q ” (ikona lupy renderowana jako Q).
SEARCH_PATTERN = r"^(検索|Q\s)"

# Doklejony na końcu termin: „ ~3/25 14:30”.
TRAILING_DATE_PATTERN = r"\s*[〜~]\s*[0-9]{1,2}/[0-9]{1,2}\s+[0-9]{2}:[0-9]{2}\s*$"

# Glify punktorów, strzałek, kółek i przycisków odtwarzania.
BULLET_GLYPHS = "▶▷►▸△▲↻◉○●◎■□"

# ---------------------------------------------------------------------------
# Progi
# ---------------------------------------------------------------------------

MIN_LINE_LENGTH = 4           # linia tekstu
MIN_ELEMENT_LENGTH = 3        # własny tekst elementu
MIN_TEXT_TITLE_LENGTH = 2     # tytuł po normalizacji (tekst)
MIN_GEOMETRY_TITLE_LENGTH = 3 # tytuł po normalizacji (geometria)
INDENT_THRESHOLD = 15.0       # wcięcie dziecka względem min_left (px)

GOAL_ID_PREFIX = "addness-"
STRATEGY_ORDER: tuple[str, ...] = ("geometry", "text")

# Bramka gotowości: minimalna długość tekstu strony, odstęp i limit prób.
MIN_CONTENT_LENGTH = 50
POLL_INTERVAL = 0.5
MAX_ATTEMPTS = 20
