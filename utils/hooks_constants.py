"""
Hook event constants for the AgentCraft sound cue system.

This module defines the canonical lifecycle events that sounds can be assigned
to, plus the narrower set of events that can be assigned per skill. Host
integrations translate their native event names into these values.
"""

from enum import Enum


class HookEvent(Enum):
    """
    Enumeration of canonical lifecycle events.

    Each enum member has a string value that matches the key used in the
    persisted assignments document.
    """

    SESSION_START = "SessionStart"
    SESSION_END = "SessionEnd"
    STOP = "Stop"
    SUBAGENT_STOP = "SubagentStop"
    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    POST_TOOL_USE_FAILURE = "PostToolUseFailure"
    NOTIFICATION = "Notification"
    PRE_COMPACT = "PreCompact"

    def __str__(self) -> str:
        """Return the string value of the hook event."""
        return self.value


class SkillHookEvent(Enum):
    """Events that can carry a per-skill assignment."""

    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"

    def __str__(self) -> str:
        return self.value


def get_all_hook_events() -> list[str]:
    """
    Get all hook event names as strings.

    Returns:
        list[str]: List of all hook event names
    """
    return [event.value for event in HookEvent]


def get_all_skill_events() -> list[str]:
    """Get all skill-level event names as strings."""
    return [event.value for event in SkillHookEvent]


def is_valid_hook_event(event_name: str) -> bool:
    """
    Check if a string is a valid hook event name.

    Args:
        event_name (str): Event name to validate

    Returns:
        bool: True if valid hook event name, False otherwise
    """
    return event_name in get_all_hook_events()


def is_valid_skill_event(event_name: str) -> bool:
    """Check if a string is an event that can be assigned per skill."""
    return event_name in get_all_skill_events()
