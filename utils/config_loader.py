"""Config file loader - loads YAML configuration from ~/.agentcraft/config.yaml."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from utils.colored_logger import setup_logger
from utils.constants import get_config_path

logger = setup_logger(__name__)


# Mapping from YAML keys to environment variable names
CONFIG_TO_ENV_MAP = {
    # Storage locations
    "paths.assignments": "AGENTCRAFT_ASSIGNMENTS",
    "paths.packs": "AGENTCRAFT_PACKS_DIR",
    # Hook behaviour
    "hooks.dedup_window_ms": "AGENTCRAFT_DEDUP_WINDOW_MS",
    "hooks.silent": "AGENTCRAFT_SILENT",
    # Dashboard API server
    "server.host": "AGENTCRAFT_HOST",
    "server.port": "AGENTCRAFT_PORT",
    # Logging
    "logging.level": "AGENTCRAFT_LOG_LEVEL",
    "logging.file": "LOG_FILE",
}


def flatten_dict(
    d: Dict[str, Any], parent_key: str = "", sep: str = "."
) -> Dict[str, Any]:
    """
    Flatten nested dictionary into dot-notation keys.

    Example:
        {"server": {"port": 4040}} -> {"server.port": 4040}
    """
    items: list[tuple[str, Any]] = []
    for k, v in d.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else k
        if isinstance(v, dict):
            items.extend(flatten_dict(v, new_key, sep=sep).items())
        else:
            items.append((new_key, v))
    return dict(items)


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load YAML config file and return flattened key-value pairs.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Dictionary of flattened config values (empty when absent or invalid)
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
        return {}

    if not isinstance(config, dict):
        return {}

    return flatten_dict(config)


def apply_config_to_env(config: Optional[Dict[str, Any]] = None) -> None:
    """
    Load config and set environment variables (only if not already set).

    Args:
        config: Pre-loaded config dict. If None, loads from default location.
    """
    if config is None:
        config = load_config()

    for config_key, env_var in CONFIG_TO_ENV_MAP.items():
        if config_key in config and env_var not in os.environ:
            value = config[config_key]

            # Convert boolean to string
            if isinstance(value, bool):
                value = "true" if value else "false"
            else:
                value = str(value)

            os.environ[env_var] = value


def create_example_config(output_path: Optional[Path] = None) -> Path:
    """
    Create an example config file with all available settings.

    Args:
        output_path: Where to write the example. If None, uses default location.

    Returns:
        Path of the written file
    """
    if output_path is None:
        output_path = get_config_path()

    example_config = """# AgentCraft Configuration
# Priority: Environment variables > This file > Defaults

paths:
  # Sound assignments shared by every host integration and the dashboard
  assignments: ~/.agentcraft/assignments.json
  # Installed sound packs, laid out as <publisher>/<name>/
  packs: ~/.agentcraft/packs

hooks:
  # Same event key firing again within this window is ignored
  dedup_window_ms: 3000
  # Resolve events but never play anything
  silent: false

server:
  host: 127.0.0.1
  port: 4040

logging:
  level: INFO
  # file: ~/.agentcraft/hooks.log
"""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(example_config, encoding="utf-8")
    return output_path


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "--create-example":
        print(f"Created example config at: {create_example_config()}")
    else:
        loaded = load_config()
        if loaded:
            print("Loaded config:")
            for key, value in loaded.items():
                env_var = CONFIG_TO_ENV_MAP.get(key, "N/A")
                print(f"  {key} = {value} ({env_var})")
        else:
            print("No config file found")
