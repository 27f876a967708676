from __future__ import annotations

import pytest

from data_model.goals import Element
from transport.emitter import CallbackTransport, ResultEmitter


class FakePage:
    """Kontekst strony w pamięci; liczy wywołania i może rzucać błędem."""

    def __init__(
        self,
        text: str = "",
        elements: list[Element] | None = None,
        fail_on: str | None = None,
    ) -> None:
        self.text = text
        self.elements = list(elements or [])
        self.fail_on = fail_on
        self.text_calls = 0
        self.reloads = 0

    def get_page_text(self) -> str:
        self.text_calls += 1
        if self.fail_on == "text":
            raise RuntimeError("uszkodzony DOM")
        return self.text

    def get_elements(self) -> list[Element]:
        if self.fail_on == "elements":
            raise RuntimeError("uszkodzony DOM")
        return list(self.elements)

    def reload_page(self) -> None:
        self.reloads += 1


class FakeSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def el(text: str, left: float, top: float, width: float = 200, height: float = 20, completed: bool = False) -> Element:
    return Element(own_text=text, left=left, top=top, width=width, height=height, completed=completed)


@pytest.fixture
def payloads() -> list[str]:
    return []


@pytest.fixture
def emitter(payloads: list[str]) -> ResultEmitter:
    return ResultEmitter(CallbackTransport(payloads.append))


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


SECTION_TEXT = "\n".join([
    "Addness  ホーム  検索",
    "今やるべきゴール",
    "▶ 英語の勉強 〜3/25 14:30",
    "○ 企画書を仕上げる",
    "〜3/25",
    "3/20 10:00",
    "Q 検索",
    "abc",
    "○ 企画書を仕上げる",
    "完了したゴール",
    "古いゴール",
])


@pytest.fixture
def section_text() -> str:
    return SECTION_TEXT


@pytest.fixture
def geometry_elements() -> list[Element]:
    return [
        el("Addness ホーム", 0, 0),
        el("今やるべきゴール", 20, 100, height=30),
        el("▶ 英語の勉強", 20, 140),
        el("単語帳 100 個", 48, 170),
        el("〜3/25 14:30", 260, 140),
        el("○ 企画書を仕上げる", 20, 200, completed=True),
        el("構成を決める", 48, 230),
        el("▶ 英語の勉強", 20, 260),
        el("非表示の要素", 20, 280, width=0),
        el("完了したゴール", 20, 320),
        el("終わった目標", 20, 350),
    ]
