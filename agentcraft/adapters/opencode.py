"""
OpenCode host adapter.

OpenCode events carry no agent identity. Tool hooks only count when the tool
is the ``skill`` tool; built-in tool calls (bash, read, edit...) are ignored.
"""

from typing import Any, Dict, Optional

from agentcraft.adapters.base import HostAdapter, text_field
from agentcraft.types import HostEvent, ScopeHint
from utils.hooks_constants import HookEvent

SKILL_TOOL = "skill"

# Emitted by the plugin shim once per OpenCode launch (new or resumed session)
PLUGIN_INIT = "plugin.init"

EVENT_MAP: Dict[str, str] = {
    PLUGIN_INIT: HookEvent.SESSION_START.value,
    "session.idle": HookEvent.STOP.value,
    "session.deleted": HookEvent.SESSION_END.value,
    "session.compacted": HookEvent.PRE_COMPACT.value,
    "session.error": HookEvent.POST_TOOL_USE_FAILURE.value,
}

TOOL_EVENT_MAP: Dict[str, str] = {
    "tool.execute.before": HookEvent.PRE_TOOL_USE.value,
    "tool.execute.after": HookEvent.POST_TOOL_USE.value,
}


class OpencodeAdapter(HostAdapter):
    """Adapter for the OpenCode plugin."""

    @property
    def host_id(self) -> str:
        return "opencode"

    def translate(
        self, native_event: str, payload: Optional[Dict[str, Any]] = None
    ) -> Optional[HostEvent]:
        if native_event in EVENT_MAP:
            return self._event(EVENT_MAP[native_event])

        event_key = TOOL_EVENT_MAP.get(native_event)
        if event_key is None:
            return None

        payload = payload if isinstance(payload, dict) else {}
        if text_field(payload, "tool") != SKILL_TOOL:
            return None
        skill_name = text_field(payload.get("args"), "name")
        if not skill_name:
            return None

        return HostEvent(
            event_key=event_key,
            dedup_key=f"skill:{skill_name}:{event_key}",
            scope_hint=ScopeHint(skill_name=skill_name),
            is_skill_event=True,
        )
