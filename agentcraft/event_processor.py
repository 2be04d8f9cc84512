# Host integration pipeline for AgentCraft
# Turns one native host event into at most one fire-and-forget sound

import random
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from agentcraft.adapters import HostAdapter, create_adapter
from agentcraft.assignment_store import AssignmentStore
from agentcraft.dedup import DedupGuard
from agentcraft.resolver import Resolution, resolve
from agentcraft.types import HostEvent, ScopeHint
from utils.colored_logger import setup_logger
from utils.hosts import is_supported
from utils.packs import resolve_pack_path
from utils.sound_player import dispatch_playback

logger = setup_logger(__name__)

Player = Callable[[Path, float], Any]


class Outcome(Enum):
    """What happened to an event."""

    PLAYED = "played"
    UNMAPPED = "unmapped"  # host event with no canonical key
    UNSUPPORTED = "unsupported"  # host cannot observe this event
    SUPPRESSED = "suppressed"  # duplicate within the dedup window
    SILENT = "silent"  # nothing assigned, or sounds disabled
    UNRESOLVABLE = "unresolvable"  # reference rejected or file missing
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ProcessResult:
    outcome: Outcome
    event: Optional[HostEvent] = None
    resolution: Optional[Resolution] = None
    path: Optional[Path] = None


class EventProcessor:
    """
    Sound pipeline of one host integration process.

    Owns its dedup state for the lifetime of the process and reads the
    assignments document fresh for every event, so edits made in the
    dashboard apply without restarting the host.
    """

    def __init__(
        self,
        host: Union[str, HostAdapter],
        store: Optional[AssignmentStore] = None,
        guard: Optional[DedupGuard] = None,
        packs_root: Optional[Union[str, Path]] = None,
        player: Optional[Player] = None,
        rng: Optional[random.Random] = None,
    ):
        adapter = create_adapter(host) if isinstance(host, str) else host
        if adapter is None:
            raise ValueError(f"No adapter for host: {host}")
        self.adapter = adapter
        self.store = store or AssignmentStore()
        self.guard = guard or DedupGuard()
        self.packs_root = Path(packs_root) if packs_root is not None else None
        self.player = player or dispatch_playback
        self.rng = rng

    @property
    def host_id(self) -> str:
        return self.adapter.host_id

    def process(
        self,
        native_event: str,
        payload: Optional[Dict[str, Any]] = None,
        now_ms: Optional[int] = None,
    ) -> ProcessResult:
        """
        Handle one native event. Never raises.

        Args:
            native_event: Event name as the host reports it
            payload: Native event payload
            now_ms: Event time in milliseconds (default: wall clock)

        Returns:
            ProcessResult describing the decision
        """
        try:
            return self._process(native_event, payload, now_ms)
        except Exception as e:
            logger.error(f"Error processing {self.host_id} event {native_event}: {e}")
            return ProcessResult(Outcome.ERROR)

    def _process(
        self,
        native_event: str,
        payload: Optional[Dict[str, Any]],
        now_ms: Optional[int],
    ) -> ProcessResult:
        event = self.adapter.translate(native_event, payload)
        if event is None:
            logger.debug(f"Ignoring {self.host_id} event: {native_event}")
            return ProcessResult(Outcome.UNMAPPED)

        if not is_supported(self.host_id, event.event_key, event.is_skill_event):
            logger.debug(f"{self.host_id} cannot observe {event.event_key}")
            return ProcessResult(Outcome.UNSUPPORTED, event=event)

        if self.guard.should_suppress(event.dedup_key, now_ms):
            logger.debug(f"Suppressed duplicate {event.dedup_key}")
            return ProcessResult(Outcome.SUPPRESSED, event=event)

        hint = event.scope_hint
        if hint.agent_name and not self.adapter.profile.supports_agent_overrides:
            hint = ScopeHint(skill_name=hint.skill_name)

        doc = self.store.load()
        resolution = resolve(doc, event.event_key, hint, rng=self.rng)
        if resolution is None:
            return ProcessResult(Outcome.SILENT, event=event)

        path = resolve_pack_path(resolution.reference, self.packs_root)
        if path is None or not path.is_file():
            logger.warning(
                f"Sound for {event.event_key} not found: {resolution.reference}"
            )
            return ProcessResult(
                Outcome.UNRESOLVABLE, event=event, resolution=resolution, path=path
            )

        logger.info(
            f"play: event={event.event_key} scope={resolution.scope} "
            f"sound={resolution.reference}"
        )
        try:
            self.player(path, resolution.volume)
        except Exception as e:
            logger.warning(f"Playback failed for {path}: {e}")

        return ProcessResult(
            Outcome.PLAYED, event=event, resolution=resolution, path=path
        )
