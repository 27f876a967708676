"""
transport/emitter.py — serializacja wyniku i dostarczenie go stronie odbierającej.

Format ładunku (zgodny bajt w bajt z encodeURIComponent(JSON.stringify(goals))):
  - JSON bez spacji, znaki spoza ASCII bez escapowania \\uXXXX,
  - klucze celu: id, title, completed, parentId (null, gdy brak rodzica),
  - percent-encoding UTF-8; niekodowane tylko A-Z a-z 0-9 - _ . ! ~ * ' ( ).
Pusta lista → "%5B%5D".

Transporty:
  HttpTransport      GET <receiver>?data=<ładunek> (requests)
  StdoutTransport    wypisuje ładunek / zdekodowany JSON
  CallbackTransport  przekazuje ładunek do funkcji (testy, osadzanie)
"""

from __future__ import annotations

import json
import sys
from typing import Callable, Protocol, TextIO
from urllib.parse import parse_qs, quote, unquote, urlparse

import requests

from data_model.goals import Goal, GoalList
from extraction.errors import PayloadError, TransportError

# Znaki, których encodeURIComponent nie koduje (poza alfanumerycznymi).
_URI_COMPONENT_SAFE = "-_.!~*'()"
_HTTP_TIMEOUT = 10


# ---------------------------------------------------------------------------
# Kodowanie / dekodowanie
# ---------------------------------------------------------------------------

def goals_to_json(goals: GoalList) -> str:
    return json.dumps(
        [g.to_wire() for g in goals],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def encode_payload(goals: GoalList) -> str:
    return quote(goals_to_json(goals), safe=_URI_COMPONENT_SAFE)


def decode_payload(payload: str) -> GoalList:
    """
    Strona odbierająca: ładunek → lista celów.

    Przyjmuje pełny URL odbiornika (…?data=…) albo sam ładunek.
    """
    raw = payload.strip()
    if raw.startswith(("http://", "https://")):
        values = parse_qs(urlparse(raw).query, keep_blank_values=True).get("data")
        if not values:
            raise PayloadError("URL nie zawiera parametru data.")
        text = values[0]  # parse_qs już odkodował
    else:
        text = unquote(raw)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PayloadError(f"Ładunek nie jest poprawnym JSON: {e}") from e
    if not isinstance(data, list):
        raise PayloadError("Ładunek musi być tablicą JSON.")
    try:
        return [Goal.from_wire(item) for item in data]
    except (KeyError, TypeError, AttributeError) as e:
        raise PayloadError(f"Niepoprawny obiekt celu w ładunku: {e}") from e


# ---------------------------------------------------------------------------
# Transporty
# ---------------------------------------------------------------------------

class Transport(Protocol):
    def deliver(self, payload: str) -> None:
        ...


class HttpTransport:
    def __init__(self, receiver_url: str, timeout: float = _HTTP_TIMEOUT) -> None:
        self.receiver_url = receiver_url.rstrip("?")
        self.timeout = timeout

    def url_for(self, payload: str) -> str:
        sep = "&" if "?" in self.receiver_url else "?"
        return f"{self.receiver_url}{sep}data={payload}"

    def deliver(self, payload: str) -> None:
        try:
            resp = requests.get(self.url_for(payload), timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"Nie udało się dostarczyć wyniku do {self.receiver_url}: {e}") from e


class StdoutTransport:
    def __init__(self, stream: TextIO | None = None, decoded: bool = False) -> None:
        self.stream = stream
        self.decoded = decoded

    def deliver(self, payload: str) -> None:
        stream = self.stream or sys.stdout
        stream.write((unquote(payload) if self.decoded else payload) + "\n")
        stream.flush()


class CallbackTransport:
    def __init__(self, callback: Callable[[str], None]) -> None:
        self.callback = callback

    def deliver(self, payload: str) -> None:
        self.callback(payload)


# ---------------------------------------------------------------------------
# Emiter
# ---------------------------------------------------------------------------

class ResultEmitter:
    """
    Jedno dostarczenie na przebieg ekstrakcji.

    encode() i send() są rozdzielone: silnik koduje wynik wewnątrz swojej
    obsługi błędów, a z send() wychodzi już tylko TransportError.
    """

    def __init__(self, transport: Transport) -> None:
        self.transport = transport
        self.emitted = 0

    def encode(self, goals: GoalList) -> str:
        return encode_payload(goals)

    def send(self, payload: str) -> None:
        self.emitted += 1
        self.transport.deliver(payload)

    def emit(self, goals: GoalList) -> None:
        self.send(self.encode(goals))
