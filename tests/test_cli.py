from __future__ import annotations

import json

import pytest

from conftest import SECTION_TEXT
from gsync import cli
from gsync.commands import watch
from transport.emitter import decode_payload


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv("GOALSYNC_RULES", raising=False)
    monkeypatch.delenv("GOALSYNC_RECEIVER_URL", raising=False)
    monkeypatch.setenv("GOALSYNC_CACHE_DIR", str(tmp_path / "cache"))


@pytest.fixture
def snapshot(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(json.dumps({"text": SECTION_TEXT, "elements": []}, ensure_ascii=False), encoding="utf-8")
    return path


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_parser_extract_defaults():
    args = cli.build_parser().parse_args(["extract", "page.html"])
    assert args.out == "stdout"
    assert args.rules is None
    assert args.save is None


def test_extract_prints_payload(snapshot, capsys):
    cli.main(["extract", str(snapshot), "--attempts", "0"])
    out = capsys.readouterr().out.strip()
    goals = decode_payload(out)
    assert [g.title for g in goals] == ["英語の勉強", "企画書を仕上げる"]
    assert [g.id for g in goals] == ["addness-0", "addness-1"]


def test_extract_save(snapshot, tmp_path, capsys):
    target = tmp_path / "goals.json"
    cli.main(["extract", str(snapshot), "--out", "none", "--save", str(target)])
    data = json.loads(target.read_text(encoding="utf-8"))
    assert data[0] == {"id": "addness-0", "title": "英語の勉強", "completed": False, "parentId": None}
    assert capsys.readouterr().out == ""


def test_extract_with_rules_file(snapshot, tmp_path, capsys):
    rules = tmp_path / "rules.json"
    rules.write_text(json.dumps({"goal_id_prefix": "g-"}), encoding="utf-8")
    cli.main(["extract", str(snapshot), "--rules", str(rules)])
    goals = decode_payload(capsys.readouterr().out.strip())
    assert [g.id for g in goals] == ["g-0", "g-1"]


def test_extract_missing_source_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.main(["extract", str(tmp_path / "missing.json")])
    assert exc.value.code == 1


def test_extract_bad_rules_exits(snapshot, tmp_path):
    rules = tmp_path / "rules.json"
    rules.write_text('{"bogus": 1}', encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        cli.main(["extract", str(snapshot), "--rules", str(rules)])
    assert exc.value.code == 1


def test_decode_json(capsys):
    cli.main(["decode", "http://localhost:19837?data=%5B%5D", "--json"])
    assert capsys.readouterr().out.strip() == "[]"


def test_decode_invalid_exits():
    with pytest.raises(SystemExit) as exc:
        cli.main(["decode", "%7Bnope"])
    assert exc.value.code == 1


def test_rules_json(capsys):
    cli.main(["rules", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["goal_id_prefix"] == "addness-"
    assert data["strategy_order"] == ["geometry", "text"]


def test_rules_from_env(monkeypatch, tmp_path, capsys):
    rules = tmp_path / "rules.json"
    rules.write_text(json.dumps({"indent_threshold": 20}), encoding="utf-8")
    monkeypatch.setenv("GOALSYNC_RULES", str(rules))
    cli.main(["rules", "--json"])
    assert json.loads(capsys.readouterr().out)["indent_threshold"] == 20.0


def test_watch_runs_count_passes(snapshot, monkeypatch, capsys):
    slept: list[float] = []
    monkeypatch.setattr(watch, "_sleep", slept.append)
    cli.main([
        "watch", str(snapshot),
        "--count", "3", "--interval", "7", "--initial-delay", "2", "--attempts", "0",
    ])
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert all(len(decode_payload(line)) == 2 for line in lines)
    assert slept == [2.0, 7.0, 7.0]


def test_watch_missing_source_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(watch, "_sleep", lambda seconds: None)
    with pytest.raises(SystemExit) as exc:
        cli.main(["watch", str(tmp_path / "missing.json"), "--count", "1"])
    assert exc.value.code == 1
