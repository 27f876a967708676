"""
page — konteksty strony dla silnika ekstrakcji.

Publiczne API:
  PageContext                 protokół granicy
  HtmlPage                    HTML z URL (requests) lub pliku, parsowany BeautifulSoup
  SnapshotPage                zrzut JSON wyrenderowanej strony (tekst + prostokąty)
  open_page(source)           wybiera kontekst po źródle
"""

from .context import PageContext
from .html import HtmlPage
from .snapshot import SnapshotPage, open_page

__all__ = [
    "PageContext",
    "HtmlPage",
    "SnapshotPage",
    "open_page",
]
