# Configuration management for the AgentCraft sound cue system
# Loads settings from environment variables with sensible defaults

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from utils.config_loader import apply_config_to_env
from utils.constants import (
    DedupConstants,
    NetworkConstants,
    get_assignments_path,
    get_packs_dir,
)

# .env in the working directory first, then ~/.agentcraft/config.yaml.
# Neither overrides variables that are already set.
load_dotenv()
apply_config_to_env()


def parse_bool_env(value: str, default: bool = False) -> bool:
    """
    Helper function to parse boolean environment variables consistently.

    Accepts multiple formats for better UX:
    - "true", "yes", "on", "1" -> True
    - anything else -> False
    - Empty/None -> default value

    Case-insensitive.
    """
    if not value:
        return default
    return value.lower() in ("true", "yes", "on", "1")


def parse_int_env(value: str, default: int) -> int:
    """Parse an integer environment variable, falling back on bad input."""
    try:
        return int(value) if value else default
    except ValueError:
        return default


def _path_env(name: str, default: Path) -> Path:
    value = os.getenv(name)
    return Path(value).expanduser() if value else default


@dataclass
class Config:
    """Configuration settings loaded from environment variables."""

    assignments_path: Path = field(default_factory=get_assignments_path)
    packs_dir: Path = field(default_factory=get_packs_dir)
    dedup_window_ms: int = DedupConstants.WINDOW_MS
    silent: bool = False

    # Dashboard API server
    host: str = NetworkConstants.DEFAULT_HOST
    port: int = NetworkConstants.DEFAULT_PORT

    # Hook and server logs go only to this file when set
    log_file: str = ""

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls(
            assignments_path=_path_env(
                "AGENTCRAFT_ASSIGNMENTS", get_assignments_path()
            ),
            packs_dir=_path_env("AGENTCRAFT_PACKS_DIR", get_packs_dir()),
            dedup_window_ms=parse_int_env(
                os.getenv("AGENTCRAFT_DEDUP_WINDOW_MS", ""), DedupConstants.WINDOW_MS
            ),
            silent=parse_bool_env(os.getenv("AGENTCRAFT_SILENT", "false")),
            host=os.getenv("AGENTCRAFT_HOST", NetworkConstants.DEFAULT_HOST),
            port=parse_int_env(
                os.getenv("AGENTCRAFT_PORT", ""), NetworkConstants.DEFAULT_PORT
            ),
            log_file=os.getenv("LOG_FILE", ""),
        )


config = Config.from_env()
