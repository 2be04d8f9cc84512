"""
Factory for creating host adapters by host id.
"""

from typing import Dict, Optional, Type

from agentcraft.adapters.base import HostAdapter
from agentcraft.adapters.claude_code import ClaudeCodeAdapter
from agentcraft.adapters.opencode import OpencodeAdapter
from agentcraft.adapters.pi import PiAdapter
from utils.colored_logger import setup_logger

logger = setup_logger(__name__)

# Registry of available adapters
ADAPTER_REGISTRY: Dict[str, Type[HostAdapter]] = {
    "claude-code": ClaudeCodeAdapter,
    "opencode": OpencodeAdapter,
    "pi": PiAdapter,
}


def create_adapter(host_id: str) -> Optional[HostAdapter]:
    """
    Create the adapter for a host.

    Args:
        host_id (str): Host identifier (e.g. "claude-code")

    Returns:
        HostAdapter or None: None for hosts without an adapter
    """
    adapter_class = ADAPTER_REGISTRY.get(host_id)
    if adapter_class is None:
        logger.error(f"Unknown host: {host_id}")
        logger.info(f"Available hosts: {list(ADAPTER_REGISTRY.keys())}")
        return None
    return adapter_class()


def register_adapter(host_id: str, adapter_class: Type[HostAdapter]) -> None:
    """
    Register a custom host adapter.

    Raises:
        ValueError: If the class does not implement HostAdapter
    """
    if not issubclass(adapter_class, HostAdapter):
        raise ValueError("Adapter class must inherit from HostAdapter")

    ADAPTER_REGISTRY[host_id] = adapter_class
    logger.info(f"Registered host adapter: {host_id}")
