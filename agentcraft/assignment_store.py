# Persistence for the sound assignments document
# Every "might be missing" case of the JSON file is handled here, so the rest
# of the system can rely on a fully populated document.

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from agentcraft.types import Scope, ScopeKind
from utils.colored_logger import setup_logger
from utils.constants import VolumeConstants, get_assignments_path
from utils.hooks_constants import is_valid_hook_event, is_valid_skill_event
from utils.sound_slots import Slot, SoundSlot, append, remove_one

logger = setup_logger(__name__)

DEFAULT_UI_SOUNDS: Dict[str, Dict[str, str]] = {
    "sc2": {
        "hover": "ui/sc-bigbox/set2-move.mp3",
        "click": "ui/sc2/click.mp3",
        "error": "ui/sc2/error.mp3",
    },
    "wc3": {
        "hover": "ui/wc3/hover.mp3",
        "click": "ui/wc3/click.mp3",
        "error": "ui/wc3/error.mp3",
    },
}


def _mapping_or_empty(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


class ScopeConfig(BaseModel):
    """Per-agent or per-skill sound set."""

    model_config = ConfigDict(extra="allow")

    enabled: bool = True
    hooks: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("enabled", mode="before")
    @classmethod
    def _only_false_disables(cls, value: Any) -> bool:
        return value is not False

    @field_validator("hooks", mode="before")
    @classmethod
    def _hooks_mapping(cls, value: Any) -> Dict[str, Any]:
        return _mapping_or_empty(value)


class Settings(BaseModel):
    """Document-wide playback and UI settings."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    master_volume: float = Field(
        default=VolumeConstants.MISSING_FIELD_VOLUME, alias="masterVolume"
    )
    enabled: bool = True
    theme: str = "terran"
    ui_theme: str = Field(default="sc2", alias="uiTheme")
    ui_sounds: Dict[str, Any] = Field(default_factory=dict, alias="uiSounds")

    @field_validator("master_volume", mode="before")
    @classmethod
    def _clamp_volume(cls, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return VolumeConstants.MISSING_FIELD_VOLUME
        if value != value:  # NaN
            return VolumeConstants.MISSING_FIELD_VOLUME
        return min(max(float(value), 0.0), 1.0)

    @field_validator("enabled", mode="before")
    @classmethod
    def _only_false_disables(cls, value: Any) -> bool:
        return value is not False

    @field_validator("theme", mode="before")
    @classmethod
    def _theme(cls, value: Any) -> str:
        return value if isinstance(value, str) and value else "terran"

    @field_validator("ui_theme", mode="before")
    @classmethod
    def _ui_theme(cls, value: Any) -> str:
        return value if isinstance(value, str) and value else "sc2"

    @field_validator("ui_sounds", mode="before")
    @classmethod
    def _ui_sounds(cls, value: Any) -> Dict[str, Any]:
        return _mapping_or_empty(value)


class AssignmentDocument(BaseModel):
    """Root of ``assignments.json``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    global_: Dict[str, Any] = Field(default_factory=dict, alias="global")
    agents: Dict[str, ScopeConfig] = Field(default_factory=dict)
    skills: Dict[str, ScopeConfig] = Field(default_factory=dict)
    settings: Settings = Field(default_factory=Settings)

    @field_validator("global_", mode="before")
    @classmethod
    def _global_mapping(cls, value: Any) -> Dict[str, Any]:
        return _mapping_or_empty(value)

    @field_validator("agents", "skills", mode="before")
    @classmethod
    def _scope_mapping(cls, value: Any) -> Dict[str, Any]:
        # Entries that are not objects cannot hold hooks; drop them
        return {
            name: config
            for name, config in _mapping_or_empty(value).items()
            if isinstance(config, (dict, ScopeConfig))
        }

    @field_validator("settings", mode="before")
    @classmethod
    def _settings_mapping(cls, value: Any) -> Dict[str, Any]:
        return _mapping_or_empty(value) if not isinstance(value, Settings) else value

    @classmethod
    def from_raw(cls, data: Any) -> "AssignmentDocument":
        """
        Build a document from parsed JSON, filling every missing part.

        Raises:
            ValidationError: Only for shapes the field coercions cannot repair
        """
        if not isinstance(data, dict):
            return default_document()
        return cls.model_validate(data)

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize with the persisted key names."""
        return self.model_dump(by_alias=True, mode="json")


def default_document() -> AssignmentDocument:
    """Document used when nothing readable is on disk yet."""
    return AssignmentDocument(
        settings=Settings(
            master_volume=VolumeConstants.NEW_DOCUMENT_VOLUME,
            ui_sounds={theme: dict(sounds) for theme, sounds in DEFAULT_UI_SOUNDS.items()},
        )
    )


class AssignmentStore:
    """
    Reads and writes the shared assignments file.

    Readers always get a complete document: a missing or broken file reads as
    the default document. Only one writer (the editing surface) is expected.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else get_assignments_path()

    def load(self) -> AssignmentDocument:
        """Load the document, substituting defaults on any failure."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No assignments file at {self.path}, using defaults")
            return default_document()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {self.path}: {e}")
            return default_document()

        try:
            return AssignmentDocument.from_raw(json.loads(raw))
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON in {self.path}: {e}")
        except ValidationError as e:
            logger.warning(f"Malformed assignments in {self.path}: {e}")
        return default_document()

    def load_raw(self) -> Dict[str, Any]:
        """Load the document as the JSON dictionary the editing surface sees."""
        return self.load().to_json_dict()

    def save(self, doc: Union[AssignmentDocument, Dict[str, Any]]) -> None:
        """
        Persist the full document.

        Raises:
            OSError: If the file cannot be written
        """
        data = doc.to_json_dict() if isinstance(doc, AssignmentDocument) else doc
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info(f"Saved assignments to {self.path}")


# Slot editing helpers (editing surface only)


def _check_event(scope: Scope, event_key: str) -> None:
    if scope.kind is ScopeKind.SKILL:
        if not is_valid_skill_event(event_key):
            raise ValueError(f"{event_key!r} cannot be assigned per skill")
    elif not is_valid_hook_event(event_key):
        raise ValueError(f"Unknown hook event: {event_key!r}")


def _hooks_for(
    doc: AssignmentDocument, scope: Scope, create: bool = False
) -> Optional[Dict[str, Any]]:
    if scope.kind is ScopeKind.GLOBAL:
        return doc.global_
    container = doc.agents if scope.kind is ScopeKind.AGENT else doc.skills
    config = container.get(scope.name)
    if config is None:
        if not create:
            return None
        config = container[scope.name] = ScopeConfig()
    return config.hooks


def get_slot(doc: AssignmentDocument, scope: Scope, event_key: str) -> Optional[SoundSlot]:
    """Return the raw slot stored at (scope, event), or None."""
    hooks = _hooks_for(doc, scope)
    if hooks is None:
        return None
    return hooks.get(event_key)


def set_slot(
    doc: AssignmentDocument, scope: Scope, event_key: str, slot: Any
) -> AssignmentDocument:
    """
    Store a slot, removing the key when it normalizes to nothing.

    New agent or skill scopes are created enabled.

    Raises:
        ValueError: If the event cannot be assigned at this scope
    """
    _check_event(scope, event_key)
    normalized = Slot.from_raw(slot)
    if normalized.is_empty():
        hooks = _hooks_for(doc, scope)
        if hooks is not None:
            hooks.pop(event_key, None)
        return doc

    hooks = _hooks_for(doc, scope, create=True)
    hooks[event_key] = normalized.to_raw()
    return doc


def add_sound(
    doc: AssignmentDocument, scope: Scope, event_key: str, ref: str
) -> AssignmentDocument:
    """Add a reference to the slot at (scope, event)."""
    return set_slot(doc, scope, event_key, append(get_slot(doc, scope, event_key), ref))


def remove_sound(
    doc: AssignmentDocument, scope: Scope, event_key: str, ref: str
) -> AssignmentDocument:
    """Remove one reference from the slot at (scope, event)."""
    return set_slot(
        doc, scope, event_key, remove_one(get_slot(doc, scope, event_key), ref)
    )


def clear_slot(
    doc: AssignmentDocument, scope: Scope, event_key: str
) -> AssignmentDocument:
    """Unassign every reference at (scope, event)."""
    return set_slot(doc, scope, event_key, None)
