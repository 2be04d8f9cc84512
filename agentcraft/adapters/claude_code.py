"""
Claude Code host adapter.

Claude Code hook names are already canonical event keys. Its payloads are the
only ones that carry agent identity, so this is the one host where per-agent
assignments apply.
"""

from typing import Any, Dict, Optional

from agentcraft.adapters.base import HostAdapter, text_field
from agentcraft.types import HostEvent
from utils.hooks_constants import HookEvent, is_valid_hook_event, is_valid_skill_event

SKILL_TOOL = "Skill"
TASK_TOOL = "Task"

TOOL_EVENTS = frozenset(
    {
        HookEvent.PRE_TOOL_USE.value,
        HookEvent.POST_TOOL_USE.value,
        HookEvent.POST_TOOL_USE_FAILURE.value,
    }
)


class ClaudeCodeAdapter(HostAdapter):
    """Adapter for Claude Code command hooks (JSON payload on stdin)."""

    @property
    def host_id(self) -> str:
        return "claude-code"

    def translate(
        self, native_event: str, payload: Optional[Dict[str, Any]] = None
    ) -> Optional[HostEvent]:
        payload = payload if isinstance(payload, dict) else {}
        event_key = native_event or text_field(payload, "hook_event_name")
        if not event_key or not is_valid_hook_event(event_key):
            return None

        tool_name = text_field(payload, "tool_name")
        tool_input = payload.get("tool_input")
        agent_name = self.agent_name(payload, tool_name, tool_input)

        if event_key not in TOOL_EVENTS:
            return self._event(event_key, agent_name=agent_name)

        skill_name = None
        if is_valid_skill_event(event_key):
            skill_name = self.skill_name(tool_name, tool_input)
        return self._event(
            event_key,
            qualifier=skill_name or tool_name,
            skill_name=skill_name,
            agent_name=agent_name,
        )

    @staticmethod
    def skill_name(tool_name: Optional[str], tool_input: Any) -> Optional[str]:
        """A skill invocation is exactly the ``Skill`` tool with a ``skill`` input."""
        if tool_name != SKILL_TOOL:
            return None
        return text_field(tool_input, "skill")

    @staticmethod
    def agent_name(
        payload: Dict[str, Any], tool_name: Optional[str], tool_input: Any
    ) -> Optional[str]:
        """
        Agent identity of the event.

        The payload's ``agent_type`` wins; otherwise a ``Task`` tool call names
        the subagent it launches in ``tool_input.subagent_type``.
        """
        agent = text_field(payload, "agent_type")
        if agent:
            return agent
        if tool_name == TASK_TOOL:
            return text_field(tool_input, "subagent_type")
        return None
