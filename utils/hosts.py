"""
Host capability table.

Each supported coding-agent host observes a different subset of lifecycle
events and not all of them carry agent identity. This static registry records
what each host can do so host integrations (and the editing surface) know which
assignments are meaningful for it.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional

from utils.hooks_constants import HookEvent, get_all_hook_events, get_all_skill_events

DEFAULT_HOST_ID = "unknown"


@dataclass(frozen=True)
class HostProfile:
    """Capabilities of one host integration."""

    id: str
    label: str
    supported_events: FrozenSet[str]
    supported_skill_events: FrozenSet[str]
    supports_agent_overrides: bool
    event_mapping: Dict[str, str] = field(default_factory=dict)
    event_notes: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize for the editing-surface API, keeping canonical event order."""
        order = get_all_hook_events()
        return {
            "id": self.id,
            "label": self.label,
            "supportedEvents": [e for e in order if e in self.supported_events],
            "supportedSkillEvents": [
                e for e in order if e in self.supported_skill_events
            ],
            "supportsAgentOverrides": self.supports_agent_overrides,
            "eventMapping": dict(self.event_mapping),
            "eventNotes": dict(self.event_notes),
        }


ALL_EVENTS = frozenset(get_all_hook_events())
ALL_SKILL_EVENTS = frozenset(get_all_skill_events())

# Hosts without subagent completion or arbitrary notifications
_SESSION_AND_TOOL_EVENTS = frozenset(
    {
        HookEvent.SESSION_START.value,
        HookEvent.SESSION_END.value,
        HookEvent.STOP.value,
        HookEvent.PRE_TOOL_USE.value,
        HookEvent.POST_TOOL_USE.value,
        HookEvent.POST_TOOL_USE_FAILURE.value,
        HookEvent.PRE_COMPACT.value,
    }
)

HOST_PROFILES: Dict[str, HostProfile] = {
    "claude-code": HostProfile(
        id="claude-code",
        label="Claude Code",
        supported_events=ALL_EVENTS,
        supported_skill_events=ALL_SKILL_EVENTS,
        supports_agent_overrides=True,
        event_mapping={event: f"{event} hook" for event in get_all_hook_events()},
    ),
    "opencode": HostProfile(
        id="opencode",
        label="OpenCode",
        supported_events=_SESSION_AND_TOOL_EVENTS,
        supported_skill_events=ALL_SKILL_EVENTS,
        supports_agent_overrides=False,
        event_mapping={
            "SessionStart": "Plugin init",
            "SessionEnd": "session.deleted",
            "Stop": "session.idle",
            "PreToolUse": "tool.execute.before (skill)",
            "PostToolUse": "tool.execute.after (skill)",
            "PostToolUseFailure": "session.error",
            "PreCompact": "session.compacted",
        },
        event_notes={
            "SessionStart": "Fires on both new and resumed sessions",
            "Stop": "Fires when model finishes responding",
            "SubagentStop": "No equivalent in OpenCode",
            "Notification": "No equivalent in OpenCode",
            "PreToolUse": 'Only fires for skill tool calls (tool="skill")',
            "PostToolUse": 'Only fires for skill tool calls (tool="skill")',
        },
    ),
    "pi": HostProfile(
        id="pi",
        label="Pi",
        supported_events=_SESSION_AND_TOOL_EVENTS,
        supported_skill_events=ALL_SKILL_EVENTS,
        supports_agent_overrides=False,
        event_mapping={
            "SessionStart": "session_start / session_switch",
            "SessionEnd": "session_shutdown",
            "Stop": "agent_end",
            "PreToolUse": "tool_call",
            "PostToolUse": "tool_execution_end",
            "PostToolUseFailure": "tool_execution_end (isError)",
            "PreCompact": "session_before_compact",
        },
        event_notes={
            "SessionStart": "Fires on session load and /new or /resume",
            "Stop": "Fires when agent finishes responding to a prompt",
            "SubagentStop": "No equivalent in pi (build via extensions)",
            "Notification": "No equivalent in pi",
            "PreToolUse": "Fires for all tool calls (read, bash, edit, write, custom)",
            "PostToolUse": "Fires for all tool calls; skill lookup matches custom tool names",
        },
    ),
    # Tools without host context show every assignable event
    DEFAULT_HOST_ID: HostProfile(
        id=DEFAULT_HOST_ID,
        label="All Clients",
        supported_events=ALL_EVENTS,
        supported_skill_events=ALL_SKILL_EVENTS,
        supports_agent_overrides=True,
    ),
}


def capabilities_for(host_id: Optional[str]) -> HostProfile:
    """
    Get the capability profile for a host.

    Unknown or missing host ids get the permissive default profile.
    """
    if host_id and host_id in HOST_PROFILES:
        return HOST_PROFILES[host_id]
    return HOST_PROFILES[DEFAULT_HOST_ID]


def is_supported(
    host_id: Optional[str], event_key: str, is_skill_event: bool = False
) -> bool:
    """Check whether a host can observe an event (at skill or global level)."""
    profile = capabilities_for(host_id)
    if is_skill_event:
        return event_key in profile.supported_skill_events
    return event_key in profile.supported_events


def all_host_ids() -> List[str]:
    """Concrete host ids, excluding the permissive default."""
    return [host_id for host_id in HOST_PROFILES if host_id != DEFAULT_HOST_ID]
