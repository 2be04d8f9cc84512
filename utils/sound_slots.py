"""
Sound slot model for the assignments document.

A slot is the value stored at one (scope, event) coordinate. On disk it is
either a single sound reference or a list of alternatives; an empty list or
an empty string means "unset". Every helper here is total: malformed input is
treated as an absent slot instead of raising.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence, Union

# Persisted representation: "ref", ["ref", ...] or absent
SoundSlot = Union[str, List[str]]


class SlotKind(Enum):
    """Shape of a normalized slot."""

    EMPTY = "empty"
    SINGLE = "single"
    MANY = "many"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Slot:
    """Normalized, immutable view of a slot value."""

    refs: tuple = ()

    @classmethod
    def from_raw(cls, raw: Any) -> "Slot":
        """Build a slot from whatever the document holds at that coordinate."""
        return cls(refs=tuple(normalize(raw)))

    @property
    def kind(self) -> SlotKind:
        if not self.refs:
            return SlotKind.EMPTY
        if len(self.refs) == 1:
            return SlotKind.SINGLE
        return SlotKind.MANY

    def is_empty(self) -> bool:
        return not self.refs

    def pick(self, rng: Optional[random.Random] = None) -> Optional[str]:
        return pick_one(self.refs, rng=rng)

    def to_raw(self) -> Optional[SoundSlot]:
        """Collapse back to the persisted string-or-list form."""
        if self.kind is SlotKind.EMPTY:
            return None
        if self.kind is SlotKind.SINGLE:
            return self.refs[0]
        return list(self.refs)


def normalize(slot: Any) -> List[str]:
    """
    Convert a slot value into an ordered list of references.

    A string becomes a one-element list, a list keeps its non-empty string
    entries in order, and anything else (None, numbers, dicts) is empty.
    Normalizing an already-normalized list returns an equal list.
    """
    if isinstance(slot, str):
        return [slot] if slot else []
    if isinstance(slot, (list, tuple)):
        return [ref for ref in slot if isinstance(ref, str) and ref]
    return []


def pick_one(
    refs: Sequence[str], rng: Optional[random.Random] = None
) -> Optional[str]:
    """
    Pick a single reference from a normalized sequence.

    Returns None for an empty sequence, the sole element for length one, and a
    uniformly random element otherwise.
    """
    if not refs:
        return None
    if len(refs) == 1:
        return refs[0]
    chooser = rng if rng is not None else random
    return refs[chooser.randrange(len(refs))]


def _collapse(refs: List[str]) -> Optional[SoundSlot]:
    return Slot(refs=tuple(refs)).to_raw()


def append(slot: Any, ref: str) -> Optional[SoundSlot]:
    """
    Add a reference to a slot, skipping exact duplicates.

    Returns a plain string when the result holds one reference and a list
    otherwise. Appending an empty or non-string reference leaves the slot as is.
    """
    refs = normalize(slot)
    if isinstance(ref, str) and ref and ref not in refs:
        refs.append(ref)
    return _collapse(refs)


def remove_one(slot: Any, ref: str) -> Optional[SoundSlot]:
    """
    Remove a reference from a slot.

    Returns None when nothing is left, a plain string when one reference
    remains and a list otherwise.
    """
    refs = [existing for existing in normalize(slot) if existing != ref]
    return _collapse(refs)
