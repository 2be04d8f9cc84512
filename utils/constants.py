"""
Centralized constants for the AgentCraft sound cue system.

This module consolidates all system constants, enums, and default values
into a single location for better maintainability and type safety.
"""

import os
from pathlib import Path

# Re-export event enums for convenience
from utils.hooks_constants import HookEvent, SkillHookEvent

__all__ = [
    "PathConstants",
    "PackConstants",
    "DedupConstants",
    "VolumeConstants",
    "DateTimeConstants",
    "NetworkConstants",
    "HTTPStatusConstants",
    "HookEvent",
    "SkillHookEvent",
    "get_server_url",
    "get_agentcraft_home",
    "get_assignments_path",
    "get_packs_dir",
    "get_config_path",
]


class PathConstants:
    """Well-known filesystem locations shared by every host integration."""

    # AGENTCRAFT_HOME is read at call time (get_agentcraft_home) so a value from
    # .env, loaded after this module is imported, still applies
    DEFAULT_HOME = Path.home() / ".agentcraft"
    ASSIGNMENTS_FILENAME = "assignments.json"
    PACKS_DIRNAME = "packs"
    CONFIG_FILENAME = "config.yaml"
    CLAUDE_DIR = Path.home() / ".claude"
    USER_SKILLS_DIR = CLAUDE_DIR / "skills"
    USER_AGENTS_DIR = CLAUDE_DIR / "agents"
    PLUGINS_JSON = CLAUDE_DIR / "plugins" / "installed_plugins.json"
    # Agent definition files are <name>.md; names never carry a path separator
    AGENT_NAME_PATTERN = r"^[a-zA-Z0-9._-]+$"


class PackConstants:
    """Constants describing sound packs and sound references."""

    DEFAULT_PUBLISHER = "rohenaz"
    DEFAULT_PACK_NAME = "agentcraft-sounds"
    AUDIO_MEDIA_TYPES = {
        ".mp3": "audio/mpeg",
        ".wav": "audio/wav",
        ".ogg": "audio/ogg",
        ".m4a": "audio/mp4",
    }
    AUDIO_EXTENSIONS = frozenset(AUDIO_MEDIA_TYPES)
    MANIFEST_FILENAME = "pack.json"
    UI_DIRNAME = "ui"
    PACK_ID_PATTERN = r"^[a-zA-Z0-9._-]+/[a-zA-Z0-9._-]+$"


class DedupConstants:
    """Constants related to duplicate event suppression."""

    WINDOW_MS = 3000


class VolumeConstants:
    """Default master volume values."""

    # A brand-new document (dashboard default)
    NEW_DOCUMENT_VOLUME = 1.0
    # An existing document whose settings omit masterVolume
    MISSING_FIELD_VOLUME = 0.5


class DateTimeConstants:
    """Constants related to date and time formatting."""

    ISO_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class NetworkConstants:
    """Constants related to the editing-surface API server."""

    DEFAULT_PORT = 4040
    DEFAULT_HOST = "127.0.0.1"
    LOCALHOST = "localhost"


class HTTPStatusConstants:
    """HTTP status code constants for better maintainability."""

    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500


# Helper functions
def get_server_url(
    port: int = NetworkConstants.DEFAULT_PORT, endpoint: str = ""
) -> str:
    """
    Generate the dashboard server URL.

    Args:
        port: Server port number (defaults to DEFAULT_PORT)
        endpoint: API endpoint path (should start with / if provided)

    Returns:
        Complete server URL with endpoint
    """
    return f"http://{NetworkConstants.LOCALHOST}:{port}{endpoint}"


def get_agentcraft_home() -> Path:
    """AgentCraft data directory (AGENTCRAFT_HOME, default ~/.agentcraft)."""
    home = os.getenv("AGENTCRAFT_HOME")
    return Path(home).expanduser() if home else PathConstants.DEFAULT_HOME


def get_assignments_path() -> Path:
    return get_agentcraft_home() / PathConstants.ASSIGNMENTS_FILENAME


def get_packs_dir() -> Path:
    return get_agentcraft_home() / PathConstants.PACKS_DIRNAME


def get_config_path() -> Path:
    return get_agentcraft_home() / PathConstants.CONFIG_FILENAME
