from __future__ import annotations

from urllib.parse import unquote

import pytest

from conftest import FakePage, el
from extraction.engine import run_extraction, waiter_for
from extraction.errors import SessionContextError, TransportError
from extraction.readiness import ReadinessWaiter
from extraction.rules import RuleSet
from extraction.strategies import ExtractionStrategy
from transport.emitter import CallbackTransport, ResultEmitter, decode_payload


class Exploding(ExtractionStrategy):
    name = "exploding"

    def extract(self, page):
        raise ValueError("nieoczekiwany układ strony")


def test_end_to_end_scenario(emitter, payloads, fake_sleep):
    page = FakePage("\n".join(["今やるべきゴール", "▶ Write report ~3/20 10:00", "Write report", "完了"]))
    goals = run_extraction(page, emitter, waiter=ReadinessWaiter(sleep=fake_sleep))

    assert [g.title for g in goals] == ["Write report"]
    assert len(payloads) == 1
    assert unquote(payloads[0]) == '[{"id":"addness-0","title":"Write report","completed":false,"parentId":null}]'


def test_idempotent_on_unchanged_page(emitter, payloads, fake_sleep, section_text, geometry_elements):
    page = FakePage(section_text, elements=geometry_elements)
    waiter = ReadinessWaiter(sleep=fake_sleep)
    first = run_extraction(page, emitter, waiter=waiter)
    second = run_extraction(page, emitter, waiter=waiter)
    assert first == second
    assert payloads[0] == payloads[1]


def test_result_invariants(emitter, payloads, fake_sleep, section_text, geometry_elements):
    page = FakePage(section_text, elements=geometry_elements)
    goals = run_extraction(page, emitter, waiter=ReadinessWaiter(sleep=fake_sleep))

    titles = [g.title for g in goals]
    assert len(titles) == len(set(titles))
    assert all(titles)
    index = {g.id: i for i, g in enumerate(goals)}
    for i, g in enumerate(goals):
        if g.parent_id is not None:
            assert index[g.parent_id] < i
            assert goals[index[g.parent_id]].parent_id is None


def test_runtime_fault_emits_empty_once(emitter, payloads, fake_sleep, section_text):
    page = FakePage(section_text)
    goals = run_extraction(
        page, emitter,
        waiter=ReadinessWaiter(sleep=fake_sleep),
        strategies=[Exploding()],
    )
    assert goals == []
    assert payloads == ["%5B%5D"]
    assert decode_payload(payloads[0]) == []


def test_fault_while_reading_page_emits_empty(emitter, payloads, fake_sleep):
    page = FakePage(fail_on="text")
    assert run_extraction(page, emitter, waiter=ReadinessWaiter(sleep=fake_sleep)) == []
    assert payloads == ["%5B%5D"]


def test_no_section_anywhere_emits_empty(emitter, payloads, fake_sleep):
    page = FakePage("x" * 80)
    assert run_extraction(page, emitter, waiter=ReadinessWaiter(sleep=fake_sleep)) == []
    assert payloads == ["%5B%5D"]


def test_missing_context_is_explicit_error(emitter, payloads):
    with pytest.raises(SessionContextError):
        run_extraction(None, emitter)
    assert payloads == []


def test_transport_error_propagates(fake_sleep, section_text):
    def broken(payload):
        raise TransportError("odbiornik niedostępny")

    with pytest.raises(TransportError):
        run_extraction(
            FakePage(section_text),
            ResultEmitter(CallbackTransport(broken)),
            waiter=ReadinessWaiter(sleep=fake_sleep),
        )


def test_rules_override_strategy_order(emitter, fake_sleep, section_text, geometry_elements):
    page = FakePage(section_text, elements=geometry_elements)
    rules = RuleSet(strategy_order=("text",), goal_id_prefix="t-")
    goals = run_extraction(page, emitter, rules=rules, waiter=ReadinessWaiter(sleep=fake_sleep))
    assert [g.id for g in goals] == ["t-0", "t-1"]
    assert all(g.parent_id is None for g in goals)


def test_unready_page_still_extracted(emitter, payloads, fake_sleep):
    page = FakePage("今やるべきゴール\nGoal one")
    rules = RuleSet(max_attempts=3, poll_interval=0.1)
    goals = run_extraction(page, emitter, rules=rules, waiter=waiter_for(rules, fake_sleep))
    assert [g.title for g in goals] == ["Goal one"]
    assert fake_sleep.calls == [0.1, 0.1, 0.1]
    assert len(payloads) == 1


def test_unencodable_result_emits_empty(emitter, payloads, fake_sleep):
    # Samotny surogat przechodzi przez JSON zrzutu, ale nie da się go zakodować w UTF-8.
    page = FakePage(elements=[
        el("今やるべきゴール", 20, 100, height=30),
        el("Bad \ud83d goal", 20, 140),
    ])
    goals = run_extraction(page, emitter, waiter=ReadinessWaiter(max_attempts=0, sleep=fake_sleep))
    assert goals == []
    assert payloads == ["%5B%5D"]
    assert emitter.emitted == 1
