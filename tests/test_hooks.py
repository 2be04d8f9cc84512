from __future__ import annotations

import io
from dataclasses import replace

import pytest

import hooks
from agentcraft.event_processor import Outcome

SCV = "rohenaz/agentcraft-sounds:sc2/terran/scv-ready.mp3"


@pytest.fixture(autouse=True)
def hook_config(monkeypatch, assignments_path, packs_root):
    cfg = replace(
        hooks.config,
        assignments_path=assignments_path,
        packs_dir=packs_root,
        silent=False,
    )
    monkeypatch.setattr(hooks, "config", cfg)
    return cfg


def test_read_json_from_stdin():
    assert hooks.read_json_from_stdin(io.StringIO('{"a": 1}')) == {"a": 1}
    assert hooks.read_json_from_stdin(io.StringIO("")) == {}
    assert hooks.read_json_from_stdin(io.StringIO("{oops")) is None
    assert hooks.read_json_from_stdin(io.StringIO("[1]")) is None


def test_parse_custom_arguments():
    args = hooks.parse_custom_arguments(["--host=pi", "--event=agent_end", "--dry-run", "x"])
    assert args == {"host": "pi", "event": "agent_end", "dry_run": True}


def test_native_event_name():
    assert hooks.native_event_name({"event": "agent_end"}, {"type": "x"}) == "agent_end"
    assert hooks.native_event_name({}, {"hook_event_name": "Stop"}) == "Stop"
    assert hooks.native_event_name({}, {"type": "session.idle"}) == "session.idle"
    assert hooks.native_event_name({}, {}) == ""


def test_claude_code_hook(write_doc, player):
    write_doc({"global": {"Stop": SCV}})
    stdin = io.StringIO('{"hook_event_name": "Stop", "session_id": "abc"}')
    result = hooks.run([], stdin, player=player)
    assert result.outcome is Outcome.PLAYED
    assert len(player.calls) == 1


def test_other_host_via_arguments(write_doc, player):
    write_doc({"global": {"Stop": SCV}})
    result = hooks.run(["--host=pi", "--event=agent_end"], io.StringIO(""), player=player)
    assert result.outcome is Outcome.PLAYED


def test_unknown_host_and_bad_input(player):
    assert hooks.run(["--host=emacs"], io.StringIO("{}"), player=player) is None
    assert hooks.run([], io.StringIO("not json"), player=player) is None
    assert player.calls == []


def test_silent_mode(monkeypatch, hook_config, write_doc):
    monkeypatch.setattr(hooks, "config", replace(hook_config, silent=True))
    write_doc({"global": {"Stop": SCV}})
    result = hooks.run([], io.StringIO('{"hook_event_name": "Stop"}'))
    assert result.outcome is Outcome.PLAYED


def test_main_always_exits_zero(monkeypatch):
    monkeypatch.setattr(hooks.sys, "argv", ["hooks.py", "--host=emacs"])
    monkeypatch.setattr(hooks.sys, "stdin", io.StringIO("garbage"))
    with pytest.raises(SystemExit) as exc:
        hooks.main()
    assert exc.value.code == 0


def test_undecodable_stdin_is_ignored(player):
    stdin = io.TextIOWrapper(io.BytesIO(b"\xff\xfe{}"), encoding="utf-8")
    assert hooks.read_json_from_stdin(stdin) is None

    stdin = io.TextIOWrapper(io.BytesIO(b"\xff\xfe{}"), encoding="utf-8")
    assert hooks.run(["--host=claude-code"], stdin, player=player) is None
    assert player.calls == []


def test_main_exits_zero_on_unexpected_error(monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(hooks, "run", explode)
    with pytest.raises(SystemExit) as exc:
        hooks.main()
    assert exc.value.code == 0


def test_main_exits_zero_on_undecodable_stdin(monkeypatch):
    monkeypatch.setattr(hooks.sys, "argv", ["hooks.py"])
    monkeypatch.setattr(
        hooks.sys, "stdin", io.TextIOWrapper(io.BytesIO(b"\xff\xfe"), encoding="utf-8")
    )
    with pytest.raises(SystemExit) as exc:
        hooks.main()
    assert exc.value.code == 0
