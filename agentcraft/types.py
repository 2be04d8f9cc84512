"""Type definitions for the application."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, TypedDict


class ClaudeHookPayload(TypedDict, total=False):
    """Hook payload Claude Code writes to a hook command's stdin."""

    session_id: str
    hook_event_name: str  # Required
    transcript_path: Optional[str]
    cwd: Optional[str]
    tool_name: Optional[str]
    tool_input: Optional[Dict[str, Any]]
    agent_type: Optional[str]
    message: Optional[str]
    # Allow arbitrary additional fields from hook events


class OpencodeToolPayload(TypedDict, total=False):
    """Payload of OpenCode ``tool.execute.before``/``after`` hooks."""

    tool: str
    args: Dict[str, Any]


class PiToolPayload(TypedDict, total=False):
    """Payload of pi ``tool_call``/``tool_execution_end`` events."""

    toolName: str
    isError: bool


class ScopeKind(Enum):
    GLOBAL = "global"
    AGENT = "agent"
    SKILL = "skill"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Scope:
    """
    Assignment level a slot belongs to.

    Rendered as ``global``, ``agent:<name>`` or ``skill:<qualifiedName>``.
    Only the first colon separates the kind, so plugin skills such as
    ``skill:plugin-dev:hook-development`` keep their own colon.
    """

    kind: ScopeKind
    name: Optional[str] = None

    @classmethod
    def global_scope(cls) -> "Scope":
        return cls(ScopeKind.GLOBAL)

    @classmethod
    def agent(cls, name: str) -> "Scope":
        return cls(ScopeKind.AGENT, name)

    @classmethod
    def skill(cls, qualified_name: str) -> "Scope":
        return cls(ScopeKind.SKILL, qualified_name)

    @classmethod
    def parse(cls, text: str) -> "Scope":
        """
        Parse a scope string.

        Raises:
            ValueError: If the string is not a valid scope
        """
        if not isinstance(text, str) or not text:
            raise ValueError("Scope must be a non-empty string")
        if text == ScopeKind.GLOBAL.value:
            return cls.global_scope()

        kind, sep, name = text.partition(":")
        if not sep or not name:
            raise ValueError(f"Invalid scope: {text!r}")
        if kind == ScopeKind.AGENT.value:
            return cls.agent(name)
        if kind == ScopeKind.SKILL.value:
            return cls.skill(name)
        raise ValueError(f"Unknown scope kind: {kind!r}")

    def __str__(self) -> str:
        if self.kind is ScopeKind.GLOBAL:
            return self.kind.value
        return f"{self.kind.value}:{self.name}"


@dataclass(frozen=True)
class ScopeHint:
    """Identity a host integration extracted from a native event."""

    agent_name: Optional[str] = None
    skill_name: Optional[str] = None


@dataclass(frozen=True)
class HostEvent:
    """A native host event translated to canonical terms."""

    event_key: str
    dedup_key: str
    scope_hint: ScopeHint = ScopeHint()
    is_skill_event: bool = False
