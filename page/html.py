"""
page/html.py — kontekst strony z dokumentu HTML (BeautifulSoup).

Źródła:
  HtmlPage.from_url(url)    pobranie przez requests (można przeładować)
  HtmlPage.from_file(path)  plik lokalny, np. zapis strony z przeglądarki
  HtmlPage(html)            gotowy tekst HTML

Tekst strony (strategia tekstowa):
  Drzewo DOM spłaszczamy do linii bloków:
  - blok liściasty (brak blokowych dzieci): cały tekst jako jedna linia,
  - blok kontenerowy: rekurencja w dzieci; jego własny tekst to osobne linie.

Elementy (strategia geometryczna):
  Każdy tag w <main> (lub <body>) z niepustym własnym tekstem. HTML nie
  niesie układu, więc prostokąt czytamy z atrybutu data-rect="l,t,w,h"
  (dopisywanego przy zrzucie strony z przeglądarki). Brak atrybutu → zerowy
  prostokąt, czyli element niewyrenderowany; strategia geometryczna nic wtedy
  nie znajdzie i selektor przejdzie na strategię tekstową.
"""

from __future__ import annotations

import re
from pathlib import Path

import requests
from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from data_model.goals import Element
from extraction.errors import NavigationError

# Tagi blokowe (determinują granice linii tekstu)
_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_BLOCK_TAGS: set[str] = {
    "div", "p", "article", "section", "main", "aside", "nav",
    "header", "footer", "blockquote",
    "li", "ul", "ol",
    "td", "th", "tr", "table",
    "form", "fieldset", "details", "summary",
} | _HEADING_TAGS

# Tagi zawierające szum (nie treść)
_NOISE_TAGS = {"script", "style", "noscript", "template"}

# Przekreślenie wprost w znacznikach
_STRIKE_TAGS = {"s", "del", "strike"}

# Ile przodków przeszukujemy w poszukiwaniu checkboksa / stylu ukończenia
_ANCESTOR_DEPTH = 5

_OPACITY_RE = re.compile(r"(?<![\w-])opacity\s*:\s*([0-9.]+)")
_DONE_OPACITY = 0.5

_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
_HTTP_TIMEOUT = 30


class HtmlPage:
    def __init__(
        self,
        html: str,
        url: str | None = None,
        path: Path | None = None,
    ) -> None:
        self.url = url
        self.path = path
        self._load(html)

    # -- konstrukcja ----------------------------------------------------------

    @classmethod
    def from_url(cls, url: str) -> HtmlPage:
        return cls(_fetch(url), url=url)

    @classmethod
    def from_file(cls, path: str | Path) -> HtmlPage:
        path = Path(path)
        return cls(_read(path), path=path)

    def _load(self, html: str) -> None:
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup.find_all(_NOISE_TAGS):
            tag.decompose()
        self._soup = soup

    # -- PageContext ------------------------------------------------------------

    def get_page_text(self) -> str:
        body: Tag = self._soup.find("body") or self._soup  # type: ignore[assignment]
        return "\n".join(_extract_lines(body))

    def get_elements(self) -> list[Element]:
        root: Tag = (
            self._soup.find("main") or self._soup.find("body") or self._soup  # type: ignore[assignment]
        )
        elements: list[Element] = []
        for el in root.find_all(True):
            own = own_text(el)
            if not own:
                continue
            left, top, width, height = _parse_rect(el.get("data-rect"))
            elements.append(Element(
                own_text=own,
                left=left,
                top=top,
                width=width,
                height=height,
                completed=detect_completed(el),
            ))
        return elements

    def reload_page(self) -> None:
        if self.url is not None:
            self._load(_fetch(self.url))
        elif self.path is not None:
            self._load(_read(self.path))


# ---------------------------------------------------------------------------
# Pobieranie
# ---------------------------------------------------------------------------

def _fetch(url: str) -> str:
    try:
        resp = requests.get(url, timeout=_HTTP_TIMEOUT, headers={"User-Agent": _USER_AGENT})
        resp.raise_for_status()
    except requests.RequestException as e:
        raise NavigationError(f"Nie udało się pobrać strony {url}: {e}") from e
    resp.encoding = resp.apparent_encoding or "utf-8"
    return resp.text


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise NavigationError(f"Nie można odczytać pliku strony {path}: {e}") from e


# ---------------------------------------------------------------------------
# Tekst
# ---------------------------------------------------------------------------

def _is_text(node: object) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, Comment)


def own_text(el: Tag) -> str:
    """Tekst należący bezpośrednio do elementu (bez tekstu potomków)."""
    return "".join(str(c) for c in el.children if _is_text(c)).strip()


def _extract_lines(body: Tag) -> list[str]:
    lines: list[str] = []

    def walk(el: Tag) -> None:
        name = el.name
        if name in _BLOCK_TAGS:
            has_block_child = any(
                isinstance(c, Tag) and c.name in _BLOCK_TAGS
                for c in el.children
            )
            if not has_block_child:
                text = el.get_text(" ", strip=True)
                if text:
                    lines.append(text)
                return
        for child in el.children:
            if isinstance(child, Tag):
                walk(child)
            elif _is_text(child):
                text = child.strip()
                if text:
                    lines.append(text)

    walk(body)
    return lines


# ---------------------------------------------------------------------------
# Geometria i stan ukończenia
# ---------------------------------------------------------------------------

def _parse_rect(raw: object) -> tuple[float, float, float, float]:
    if not isinstance(raw, str):
        return 0.0, 0.0, 0.0, 0.0
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 4:
        return 0.0, 0.0, 0.0, 0.0
    try:
        left, top, width, height = (float(p) for p in parts)
    except ValueError:
        return 0.0, 0.0, 0.0, 0.0
    return left, top, width, height


def _looks_done(el: Tag) -> bool:
    if el.name in _STRIKE_TAGS:
        return True
    if str(el.get("data-completed", "")).lower() in ("true", "1"):
        return True
    style = str(el.get("style", "")).lower()
    if "line-through" in style:
        return True
    m = _OPACITY_RE.search(style)
    if m:
        try:
            return float(m.group(1)) <= _DONE_OPACITY
        except ValueError:
            return False
    return False


def detect_completed(el: Tag) -> bool:
    """
    Ukończenie celu kodowane przez stronę:
      1. przekreślenie / przygaszenie / data-completed na elemencie lub przodku,
      2. najbliższy checkbox w obrębie _ANCESTOR_DEPTH przodków
         (input[type=checkbox] z atrybutem checked albo role=checkbox
         z aria-checked="true").
    """
    node: Tag | None = el
    for _ in range(_ANCESTOR_DEPTH + 1):
        if node is None or node.name == "[document]":
            break
        if _looks_done(node):
            return True
        node = node.parent

    node = el.parent
    for _ in range(_ANCESTOR_DEPTH):
        if node is None or node.name == "[document]":
            break
        if node.get("role") == "checkbox":
            return node.get("aria-checked") == "true"
        # Kontener kilku pozycji: checkboksy w nim należą do sąsiadów.
        if _text_items(node) > 1:
            break
        state = _checkbox_state(node)
        if state is not None:
            return state
        node = node.parent
    return False


def _checkbox_state(node: Tag) -> bool | None:
    """Stan pierwszego checkboksa wśród potomków; None, gdy go nie ma."""
    cb = node.find("input", attrs={"type": "checkbox"})
    if cb is not None:
        return cb.has_attr("checked")
    role = node.find(attrs={"role": "checkbox"})
    if role is not None:
        return role.get("aria-checked") == "true"
    return None


def _text_items(node: Tag) -> int:
    count = 1 if own_text(node) else 0
    return count + sum(1 for d in node.find_all(True) if own_text(d))
