from __future__ import annotations

import json

import pytest
import requests

from extraction import rules as rules_mod
from extraction.errors import RulesError
from extraction.rules import DEFAULT_RULES, RuleSet, load_rules

URL = "https://example.com/goalsync/rules.json"


class _Resp:
    def __init__(self, text: str, status: int = 200) -> None:
        self.text = text
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(str(self.status_code))


class FakeGet:
    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.urls: list[str] = []

    def __call__(self, url, timeout):
        self.urls.append(url)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class TestRuleSet:
    def test_defaults(self):
        assert DEFAULT_RULES.start_compact == "今やるべきゴール"
        assert DEFAULT_RULES.indent_threshold == 15.0
        assert DEFAULT_RULES.strategy_order == ("geometry", "text")

    def test_from_dict_converts_lists_and_ints(self):
        rules = RuleSet.from_dict({"end_prefixes": ["Done"], "indent_threshold": 20})
        assert rules.end_prefixes == ("Done",)
        assert rules.indent_threshold == 20.0
        assert rules.start_terms == DEFAULT_RULES.start_terms

    def test_round_trip_through_dict(self):
        assert RuleSet.from_dict(DEFAULT_RULES.to_dict()) == DEFAULT_RULES

    @pytest.mark.parametrize("data", [
        {"unknown_key": 1},
        {"end_prefixes": "完了"},
        {"min_line_length": "4"},
        {"min_line_length": 4.5},
        {"max_attempts": True},
        {"min_line_length": False},
        {"indent_threshold": True},
        {"search_pattern": "("},
        {"strategy_order": []},
        [],
    ])
    def test_invalid(self, data):
        with pytest.raises(RulesError):
            RuleSet.from_dict(data)


class TestLoadRules:
    def test_none_is_default(self):
        assert load_rules(None) is DEFAULT_RULES

    def test_local_file(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"goal_id_prefix": "g-"}), encoding="utf-8")
        assert load_rules(path).goal_id_prefix == "g-"

    def test_local_file_errors(self, tmp_path):
        with pytest.raises(RulesError):
            load_rules(tmp_path / "missing.json")
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        with pytest.raises(RulesError):
            load_rules(bad)

    def test_url_is_cached_for_ttl(self, tmp_path, monkeypatch):
        get = FakeGet(_Resp('{"goal_id_prefix": "remote-"}'), _Resp('{"goal_id_prefix": "fresh-"}'))
        monkeypatch.setattr(rules_mod.requests, "get", get)

        first = load_rules(URL, cache_dir=tmp_path, ttl=3600, now=lambda: 1000.0)
        cached = load_rules(URL, cache_dir=tmp_path, ttl=3600, now=lambda: 2000.0)
        expired = load_rules(URL, cache_dir=tmp_path, ttl=3600, now=lambda: 5000.0)

        assert first.goal_id_prefix == "remote-"
        assert cached.goal_id_prefix == "remote-"
        assert expired.goal_id_prefix == "fresh-"
        assert len(get.urls) == 2

    def test_stale_cache_used_when_fetch_fails(self, tmp_path, monkeypatch):
        get = FakeGet(_Resp('{"goal_id_prefix": "remote-"}'), requests.ConnectionError("offline"))
        monkeypatch.setattr(rules_mod.requests, "get", get)

        load_rules(URL, cache_dir=tmp_path, ttl=10, now=lambda: 0.0)
        rules = load_rules(URL, cache_dir=tmp_path, ttl=10, now=lambda: 100.0)
        assert rules.goal_id_prefix == "remote-"

    def test_invalid_remote_rules_fall_back_to_cache(self, tmp_path, monkeypatch):
        get = FakeGet(_Resp('{"goal_id_prefix": "remote-"}'), _Resp('{"bogus": 1}'))
        monkeypatch.setattr(rules_mod.requests, "get", get)

        load_rules(URL, cache_dir=tmp_path, ttl=0, now=lambda: 0.0)
        assert load_rules(URL, cache_dir=tmp_path, ttl=0, now=lambda: 1.0).goal_id_prefix == "remote-"

    def test_fetch_failure_without_cache(self, tmp_path, monkeypatch):
        monkeypatch.setattr(rules_mod.requests, "get", FakeGet(_Resp("", status=404)))
        with pytest.raises(RulesError):
            load_rules(URL, cache_dir=tmp_path)

    def test_cache_of_other_source_ignored(self, tmp_path, monkeypatch):
        get = FakeGet(_Resp('{"goal_id_prefix": "a-"}'), _Resp('{"goal_id_prefix": "b-"}'))
        monkeypatch.setattr(rules_mod.requests, "get", get)

        load_rules(URL, cache_dir=tmp_path, now=lambda: 0.0)
        other = load_rules(URL + "?v=2", cache_dir=tmp_path, now=lambda: 1.0)
        assert other.goal_id_prefix == "b-"
