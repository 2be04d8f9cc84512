from __future__ import annotations

import pytest

from agentcraft.adapters import HostAdapter, create_adapter, register_adapter
from agentcraft.adapters.claude_code import ClaudeCodeAdapter
from agentcraft.adapters.opencode import OpencodeAdapter
from agentcraft.adapters.pi import PiAdapter
from agentcraft.types import ScopeHint


def test_factory():
    assert isinstance(create_adapter("claude-code"), ClaudeCodeAdapter)
    assert isinstance(create_adapter("opencode"), OpencodeAdapter)
    assert isinstance(create_adapter("pi"), PiAdapter)
    assert create_adapter("emacs") is None


def test_register_adapter_requires_subclass():
    with pytest.raises(ValueError):
        register_adapter("bogus", object)


# Claude Code


def test_claude_lifecycle_event():
    event = ClaudeCodeAdapter().translate("Stop", {"hook_event_name": "Stop"})
    assert event.event_key == "Stop"
    assert event.dedup_key == "Stop"
    assert event.scope_hint == ScopeHint()
    assert event.is_skill_event is False


def test_claude_event_name_from_payload():
    event = ClaudeCodeAdapter().translate("", {"hook_event_name": "PreCompact"})
    assert event.event_key == "PreCompact"


def test_claude_ignores_unknown_events():
    assert ClaudeCodeAdapter().translate("UserPromptSubmit", {}) is None


def test_claude_skill_tool():
    payload = {
        "hook_event_name": "PreToolUse",
        "tool_name": "Skill",
        "tool_input": {"skill": "plugin-dev:hook-development"},
    }
    event = ClaudeCodeAdapter().translate("PreToolUse", payload)
    assert event.scope_hint.skill_name == "plugin-dev:hook-development"
    assert event.is_skill_event is True
    assert event.dedup_key == "PreToolUse:plugin-dev:hook-development"


def test_claude_only_exact_skill_tool_counts():
    payload = {"tool_name": "MySkillRunner", "tool_input": {"skill": "x"}}
    event = ClaudeCodeAdapter().translate("PreToolUse", payload)
    assert event.scope_hint.skill_name is None
    assert event.dedup_key == "PreToolUse:MySkillRunner"


def test_claude_failure_has_no_skill_scope():
    payload = {"tool_name": "Skill", "tool_input": {"skill": "x"}}
    event = ClaudeCodeAdapter().translate("PostToolUseFailure", payload)
    assert event.scope_hint.skill_name is None
    assert event.is_skill_event is False


def test_claude_agent_identity():
    adapter = ClaudeCodeAdapter()
    event = adapter.translate("SubagentStop", {"agent_type": "code-reviewer"})
    assert event.scope_hint.agent_name == "code-reviewer"

    task = {"tool_name": "Task", "tool_input": {"subagent_type": "explorer"}}
    event = adapter.translate("PreToolUse", task)
    assert event.scope_hint.agent_name == "explorer"

    both = dict(task, agent_type="planner")
    assert adapter.translate("PreToolUse", both).scope_hint.agent_name == "planner"


# OpenCode


@pytest.mark.parametrize(
    "native, key",
    [
        ("plugin.init", "SessionStart"),
        ("session.idle", "Stop"),
        ("session.deleted", "SessionEnd"),
        ("session.compacted", "PreCompact"),
        ("session.error", "PostToolUseFailure"),
    ],
)
def test_opencode_lifecycle(native, key):
    event = OpencodeAdapter().translate(native, {})
    assert event.event_key == key
    assert event.dedup_key == key


def test_opencode_skill_tool():
    payload = {"tool": "skill", "args": {"name": "ask-questions"}}
    event = OpencodeAdapter().translate("tool.execute.after", payload)
    assert event.event_key == "PostToolUse"
    assert event.scope_hint == ScopeHint(skill_name="ask-questions")
    assert event.dedup_key == "skill:ask-questions:PostToolUse"
    assert event.is_skill_event is True


@pytest.mark.parametrize(
    "payload",
    [
        {"tool": "bash", "args": {"command": "ls"}},
        {"tool": "skill", "args": {}},
        {"tool": "skill"},
        None,
    ],
)
def test_opencode_ignores_non_skill_tools(payload):
    assert OpencodeAdapter().translate("tool.execute.before", payload) is None


def test_opencode_ignores_unmapped():
    assert OpencodeAdapter().translate("message.updated", {}) is None


# Pi


@pytest.mark.parametrize(
    "native, key",
    [
        ("session_start", "SessionStart"),
        ("session_switch", "SessionStart"),
        ("session_shutdown", "SessionEnd"),
        ("agent_end", "Stop"),
        ("session_before_compact", "PreCompact"),
    ],
)
def test_pi_lifecycle(native, key):
    assert PiAdapter().translate(native, {}).event_key == key


def test_pi_builtin_tool_is_not_a_skill():
    event = PiAdapter().translate("tool_call", {"toolName": "bash"})
    assert event.event_key == "PreToolUse"
    assert event.scope_hint.skill_name is None
    assert event.dedup_key == "PreToolUse:bash"


def test_pi_custom_tool_is_a_skill():
    event = PiAdapter().translate("tool_execution_end", {"toolName": "deploy"})
    assert event.event_key == "PostToolUse"
    assert event.scope_hint.skill_name == "deploy"
    assert event.is_skill_event is True


def test_pi_tool_error():
    event = PiAdapter().translate(
        "tool_execution_end", {"toolName": "deploy", "isError": True}
    )
    assert event.event_key == "PostToolUseFailure"
    assert event.dedup_key == "PostToolUseFailure:deploy"
    assert event.is_skill_event is False


def test_adapters_share_base_class():
    for host_id in ("claude-code", "opencode", "pi"):
        adapter = create_adapter(host_id)
        assert isinstance(adapter, HostAdapter)
        assert adapter.profile.id == host_id
