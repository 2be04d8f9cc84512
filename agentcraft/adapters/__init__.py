"""
Host adapters for AgentCraft.

This package translates each coding-agent host's native events into canonical
event keys and scope hints.
"""

from .base import HostAdapter
from .factory import create_adapter, register_adapter

__all__ = ["HostAdapter", "create_adapter", "register_adapter"]
