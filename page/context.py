"""
page/context.py — granica, przez którą silnik widzi stronę.

Silnik nie zna przeglądarki ani okna; potrzebuje tylko:
  get_page_text() -> str            widoczny tekst w kolejności dokumentu
  get_elements()  -> list[Element]  elementy z własnym tekstem i prostokątem
  reload_page()   -> None           ponowna nawigacja (NavigationError przy błędzie)
"""

from __future__ import annotations

from typing import Protocol

from data_model.goals import Element


class PageContext(Protocol):
    def get_page_text(self) -> str:
        ...

    def get_elements(self) -> list[Element]:
        ...

    def reload_page(self) -> None:
        ...
