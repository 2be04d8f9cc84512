# Event resolution: pick the sound for a canonical event
# Precedence is skill -> agent -> global; the first non-empty slot wins.

import random
from dataclasses import dataclass
from typing import Dict, Optional

from agentcraft.assignment_store import AssignmentDocument, ScopeConfig
from agentcraft.types import Scope, ScopeHint
from utils.colored_logger import setup_logger
from utils.sound_slots import Slot

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Outcome of a successful lookup."""

    reference: str
    scope: Scope
    volume: float


def _scoped_slot(
    configs: Dict[str, ScopeConfig], name: Optional[str], event_key: str
) -> Slot:
    if not name:
        return Slot()
    config = configs.get(name)
    if config is None or config.enabled is False:
        return Slot()
    return Slot.from_raw(config.hooks.get(event_key))


def resolve(
    doc: AssignmentDocument,
    event_key: str,
    scope_hint: Optional[ScopeHint] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Resolution]:
    """
    Resolve an event to a single sound reference.

    The master switch (``settings.enabled``) silences every tier. A disabled
    skill or agent, or a slot that normalizes to nothing, falls through to the
    next tier. The chosen reference is not checked against the filesystem.

    There is no host id parameter: resolution is host-agnostic, and host
    capability filtering happens earlier in the event processor.

    Args:
        doc: Loaded assignments document
        event_key: Canonical event name (e.g. "PreToolUse")
        scope_hint: Agent and skill identity from the host event
        rng: Random source for multi-sound slots

    Returns:
        Resolution or None: None means no sound is assigned
    """
    if doc.settings.enabled is False:
        logger.debug(f"Sounds disabled, skipping {event_key}")
        return None

    hint = scope_hint or ScopeHint()
    tiers = (
        (Scope.skill(hint.skill_name) if hint.skill_name else None,
         _scoped_slot(doc.skills, hint.skill_name, event_key)),
        (Scope.agent(hint.agent_name) if hint.agent_name else None,
         _scoped_slot(doc.agents, hint.agent_name, event_key)),
        (Scope.global_scope(), Slot.from_raw(doc.global_.get(event_key))),
    )

    for scope, slot in tiers:
        if slot.is_empty():
            continue
        reference = slot.pick(rng)
        logger.debug(f"{event_key} resolved at {scope}: {reference}")
        return Resolution(
            reference=reference, scope=scope, volume=doc.settings.master_volume
        )

    return None


def resolve_reference(
    doc: AssignmentDocument,
    event_key: str,
    scope_hint: Optional[ScopeHint] = None,
    rng: Optional[random.Random] = None,
) -> Optional[str]:
    """Same as ``resolve`` but returns only the chosen reference."""
    resolution = resolve(doc, event_key, scope_hint, rng)
    return resolution.reference if resolution else None
