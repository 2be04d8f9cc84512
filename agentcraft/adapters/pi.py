"""
Pi host adapter.

Pi reports every tool call. Custom tool names double as skill names; the
built-in tools fire far too often for per-tool sounds and never look up a skill.
"""

from typing import Any, Dict, Optional

from agentcraft.adapters.base import HostAdapter, text_field
from agentcraft.types import HostEvent
from utils.hooks_constants import HookEvent

BUILTIN_TOOLS = frozenset({"read", "bash", "edit", "write", "grep", "find", "ls"})

EVENT_MAP: Dict[str, str] = {
    "session_start": HookEvent.SESSION_START.value,
    # /new or /resume
    "session_switch": HookEvent.SESSION_START.value,
    "session_shutdown": HookEvent.SESSION_END.value,
    "agent_end": HookEvent.STOP.value,
    "session_before_compact": HookEvent.PRE_COMPACT.value,
}


class PiAdapter(HostAdapter):
    """Adapter for the pi coding agent extension."""

    @property
    def host_id(self) -> str:
        return "pi"

    def translate(
        self, native_event: str, payload: Optional[Dict[str, Any]] = None
    ) -> Optional[HostEvent]:
        if native_event in EVENT_MAP:
            return self._event(EVENT_MAP[native_event])

        payload = payload if isinstance(payload, dict) else {}
        if native_event == "tool_call":
            event_key = HookEvent.PRE_TOOL_USE.value
        elif native_event == "tool_execution_end":
            if payload.get("isError") is True:
                event_key = HookEvent.POST_TOOL_USE_FAILURE.value
            else:
                event_key = HookEvent.POST_TOOL_USE.value
        else:
            return None

        tool_name = text_field(payload, "toolName")
        skill_name = None
        if (
            tool_name
            and tool_name not in BUILTIN_TOOLS
            and event_key != HookEvent.POST_TOOL_USE_FAILURE.value
        ):
            skill_name = tool_name
        return self._event(event_key, qualifier=tool_name, skill_name=skill_name)
