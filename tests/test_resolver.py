from __future__ import annotations

import inspect
from collections import Counter

from agentcraft.assignment_store import AssignmentDocument, default_document
from agentcraft.resolver import resolve, resolve_reference
from agentcraft.types import Scope, ScopeHint


def make_doc(**data) -> AssignmentDocument:
    return AssignmentDocument.from_raw(data)


def test_empty_document_resolves_nothing():
    doc = default_document()
    for event in ("SessionStart", "Stop", "PreToolUse"):
        assert resolve(doc, event) is None


def test_master_switch_dominates_every_tier():
    doc = make_doc(
        **{
            "global": {"Stop": "g"},
            "agents": {"a": {"hooks": {"Stop": "agent"}}},
            "skills": {"s": {"hooks": {"PreToolUse": "skill"}}},
            "settings": {"enabled": False},
        }
    )
    assert resolve(doc, "Stop") is None
    assert resolve(doc, "Stop", ScopeHint(agent_name="a")) is None
    assert resolve(doc, "PreToolUse", ScopeHint(skill_name="s")) is None


def test_skill_beats_agent_beats_global():
    doc = make_doc(
        **{
            "global": {"PreToolUse": "g"},
            "agents": {"a": {"hooks": {"PreToolUse": "agent"}}},
            "skills": {"s": {"hooks": {"PreToolUse": "skill"}}},
        }
    )
    hint = ScopeHint(agent_name="a", skill_name="s")
    result = resolve(doc, "PreToolUse", hint)
    assert result.reference == "skill"
    assert result.scope == Scope.skill("s")

    result = resolve(doc, "PreToolUse", ScopeHint(agent_name="a"))
    assert result.reference == "agent"
    assert result.scope == Scope.agent("a")

    result = resolve(doc, "PreToolUse")
    assert result.reference == "g"
    assert result.scope == Scope.global_scope()


def test_disabled_skill_falls_through_to_global():
    doc = make_doc(
        **{
            "global": {"PreToolUse": "b"},
            "skills": {"x": {"enabled": False, "hooks": {"PreToolUse": "a"}}},
        }
    )
    assert resolve_reference(doc, "PreToolUse", ScopeHint(skill_name="x")) == "b"


def test_disabled_agent_falls_through():
    doc = make_doc(
        **{
            "global": {"Stop": "g"},
            "agents": {"a": {"enabled": False, "hooks": {"Stop": "agent"}}},
        }
    )
    assert resolve_reference(doc, "Stop", ScopeHint(agent_name="a")) == "g"


def test_empty_slot_falls_through():
    doc = make_doc(
        **{
            "global": {"Stop": "g"},
            "agents": {"a": {"hooks": {"Stop": ["", None]}}},
            "skills": {"s": {"hooks": {"Stop": []}}},
        }
    )
    hint = ScopeHint(agent_name="a", skill_name="s")
    assert resolve_reference(doc, "Stop", hint) == "g"


def test_unknown_scope_names_fall_through():
    doc = make_doc(**{"global": {"Stop": "g"}})
    hint = ScopeHint(agent_name="nobody", skill_name="nothing")
    assert resolve_reference(doc, "Stop", hint) == "g"


def test_multi_value_slot_is_uniform(rng):
    doc = make_doc(**{"global": {"Stop": ["a", "b", "c"]}})
    counts = Counter(resolve_reference(doc, "Stop", rng=rng) for _ in range(3000))
    assert set(counts) == {"a", "b", "c"}
    for count in counts.values():
        assert 800 < count < 1200


def test_volume_is_master_volume_for_every_tier():
    doc = make_doc(
        **{
            "global": {"Stop": "g"},
            "agents": {"a": {"hooks": {"Stop": "agent"}}},
            "settings": {"masterVolume": 0.3},
        }
    )
    assert resolve(doc, "Stop").volume == 0.3
    assert resolve(doc, "Stop", ScopeHint(agent_name="a")).volume == 0.3


def test_resolution_takes_no_host_id():
    params = inspect.signature(resolve).parameters
    assert list(params) == ["doc", "event_key", "scope_hint", "rng"]
