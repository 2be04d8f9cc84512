"""
Base abstract class for host adapters.

An adapter turns one host's native event (name plus payload) into a canonical
HostEvent: the event key, the agent/skill identity the payload carries and the
key used for duplicate suppression.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from agentcraft.types import HostEvent, ScopeHint
from utils.hosts import HostProfile, capabilities_for


class HostAdapter(ABC):
    """Abstract base class for host integrations."""

    @property
    @abstractmethod
    def host_id(self) -> str:
        """Return the host identifier used in the capability table."""
        pass

    @property
    def profile(self) -> HostProfile:
        return capabilities_for(self.host_id)

    @abstractmethod
    def translate(
        self, native_event: str, payload: Optional[Dict[str, Any]] = None
    ) -> Optional[HostEvent]:
        """
        Translate a native event.

        Args:
            native_event (str): Event name as the host reports it
            payload (dict): Event payload from the host

        Returns:
            HostEvent or None: None for events this host integration ignores
        """
        pass

    def _event(
        self,
        event_key: str,
        qualifier: Optional[str] = None,
        skill_name: Optional[str] = None,
        agent_name: Optional[str] = None,
    ) -> HostEvent:
        """Build a HostEvent with the ``<event>:<qualifier>`` dedup key."""
        dedup_key = f"{event_key}:{qualifier}" if qualifier else event_key
        return HostEvent(
            event_key=event_key,
            dedup_key=dedup_key,
            scope_hint=ScopeHint(agent_name=agent_name, skill_name=skill_name),
            is_skill_event=skill_name is not None,
        )


def text_field(data: Any, key: str) -> Optional[str]:
    """Read a non-empty string field from a payload that may not be a dict."""
    if not isinstance(data, dict):
        return None
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
