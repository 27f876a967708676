"""
page/snapshot.py — kontekst strony ze zrzutu JSON wyrenderowanej strony.

Zrzut robi się w przeglądarce (document.body.innerText + getBoundingClientRect
dla elementów z własnym tekstem) i zapisuje jako:

  {
    "url": "https://…",                       (opcjonalne)
    "text": "…widoczny tekst…",
    "elements": [
      {"own_text": "▶ Cel", "left": 24, "top": 310, "width": 200, "height": 20,
       "completed": false}
    ]
  }

reload_page() czyta plik ponownie, bo zewnętrzny proces może go nadpisywać.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from data_model.goals import Element
from extraction.errors import NavigationError
from page.html import HtmlPage


class SnapshotPage:
    def __init__(
        self,
        text: str,
        elements: list[Element] | None = None,
        path: Path | None = None,
    ) -> None:
        self.text = text
        self.elements = list(elements or [])
        self.path = path

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> SnapshotPage:
        if not isinstance(data, dict):
            raise NavigationError("Zrzut strony musi być obiektem JSON.")
        raw = data.get("elements", [])
        if not isinstance(raw, list):
            raise NavigationError("Pole elements w zrzucie musi być listą.")
        elements = [_element_from_dict(e) for e in raw]
        return cls(str(data.get("text", "")), elements, path=path)

    @classmethod
    def from_file(cls, path: str | Path) -> SnapshotPage:
        path = Path(path)
        return cls.from_dict(_read_json(path), path=path)

    def get_page_text(self) -> str:
        return self.text

    def get_elements(self) -> list[Element]:
        return list(self.elements)

    def reload_page(self) -> None:
        if self.path is None:
            return
        fresh = SnapshotPage.from_file(self.path)
        self.text = fresh.text
        self.elements = fresh.elements


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise NavigationError(f"Nie można odczytać zrzutu {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise NavigationError(f"Zrzut {path} nie jest poprawnym JSON: {e}") from e


def _element_from_dict(data: dict[str, Any]) -> Element:
    try:
        return Element(
            own_text=str(data.get("own_text", "")),
            left=float(data.get("left", 0.0)),
            top=float(data.get("top", 0.0)),
            width=float(data.get("width", 0.0)),
            height=float(data.get("height", 0.0)),
            completed=bool(data.get("completed", False)),
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise NavigationError(f"Niepoprawny element w zrzucie: {data!r}") from e


def open_page(source: str | Path) -> HtmlPage | SnapshotPage:
    """URL → HtmlPage.from_url; *.json → SnapshotPage; inny plik → HtmlPage.from_file."""
    source_str = str(source)
    if source_str.startswith(("http://", "https://")):
        return HtmlPage.from_url(source_str)
    path = Path(source_str)
    if path.suffix.lower() == ".json":
        return SnapshotPage.from_file(path)
    return HtmlPage.from_file(path)
