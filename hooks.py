#!/usr/bin/env -S uv run --script
# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "pydantic",
#     "pygame",
#     "python-dotenv",
#     "pyyaml",
# ]
# ///

# AgentCraft hook entry point
# Receives one host event as JSON on stdin and plays the assigned sound.
# Always exits 0: a sound cue must never interrupt the host.

import json
import sys
from typing import Any, Dict, Optional

from agentcraft.assignment_store import AssignmentStore
from agentcraft.dedup import DedupGuard
from agentcraft.event_processor import EventProcessor, ProcessResult
from config import config
from utils.colored_logger import configure_root_logging, setup_logger

configure_root_logging(log_file=config.log_file or None)
logger = setup_logger(__name__)

DEFAULT_HOST = "claude-code"


def read_json_from_stdin(stream=None) -> Optional[Dict[str, Any]]:
    """Read and parse the event payload; None when it is missing or invalid."""
    stream = stream or sys.stdin
    try:
        data = stream.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading from stdin: {e}")
        return None

    if not data.strip():
        return {}

    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON format - {e}")
        return None

    if not isinstance(payload, dict):
        logger.error("Event payload must be a JSON object")
        return None
    return payload


def parse_custom_arguments(argv=None) -> Dict[str, Any]:
    """
    Parse any --key=value or --flag arguments dynamically.
    Dashes in keys become underscores.
    """
    arguments: Dict[str, Any] = {}
    for arg in (sys.argv[1:] if argv is None else argv):
        if not arg.startswith("--"):
            continue
        key = arg[2:]
        if "=" in key:
            key, value = key.split("=", 1)
            arguments[key.replace("-", "_")] = value
        else:
            arguments[key.replace("-", "_")] = True
    return arguments


def native_event_name(arguments: Dict[str, Any], payload: Dict[str, Any]) -> str:
    """Event name from --event, else from the payload itself."""
    event = arguments.get("event")
    if isinstance(event, str) and event:
        return event
    for key in ("hook_event_name", "type"):
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def run(argv=None, stream=None, player=None) -> Optional[ProcessResult]:
    """Process one event; returns None when nothing could be processed."""
    arguments = parse_custom_arguments(argv)
    payload = read_json_from_stdin(stream)
    if payload is None:
        return None

    host = str(arguments.get("host") or DEFAULT_HOST)
    if config.silent:
        player = player or (lambda path, volume: None)

    try:
        processor = EventProcessor(
            host,
            store=AssignmentStore(config.assignments_path),
            guard=DedupGuard(config.dedup_window_ms),
            packs_root=config.packs_dir,
            player=player,
        )
    except ValueError as e:
        logger.error(str(e))
        return None

    result = processor.process(native_event_name(arguments, payload), payload)
    logger.debug(f"{host} event handled: {result.outcome}")
    return result


def main():
    """Main function to handle the hook process."""
    try:
        run()
    except Exception as e:
        logger.error(f"Unexpected error in hook: {e}")
    sys.exit(0)


if __name__ == "__main__":
    main()
