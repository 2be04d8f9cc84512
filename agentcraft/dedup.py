# Duplicate event suppression
# Hosts sometimes report the same moment more than once in quick succession;
# a key that fired within the window is ignored.

import time
from typing import Dict, Optional

from utils.constants import DedupConstants


def now_millis() -> int:
    """Wall-clock time in milliseconds."""
    return int(time.time() * 1000)


class DedupGuard:
    """
    Per-process memory of when each dedup key last fired.

    A key is recorded when it is allowed through, whether or not a sound ends
    up playing. Suppressed attempts do not extend the window. Keys are
    independent of each other and nothing is persisted.
    """

    def __init__(self, window_ms: int = DedupConstants.WINDOW_MS):
        self.window_ms = window_ms
        self._last_fired: Dict[str, int] = {}

    def should_suppress(self, key: str, now_ms: Optional[int] = None) -> bool:
        """
        Check a dedup key and record it when allowed.

        Args:
            key: Event key, optionally narrowed by tool or skill name
            now_ms: Current time in milliseconds (default: wall clock)

        Returns:
            bool: True if the event should be ignored
        """
        now = now_millis() if now_ms is None else now_ms
        last = self._last_fired.get(key)
        if last is not None and now - last < self.window_ms:
            return True
        self._last_fired[key] = now
        return False

    def reset(self) -> None:
        self._last_fired.clear()

    def __len__(self) -> int:
        return len(self._last_fired)
