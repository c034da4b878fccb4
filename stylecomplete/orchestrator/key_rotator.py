"""
Round-robin rotation across Gemini API keys.

Rotation is blind: every call advances the cursor regardless of whether the
previous key worked. There is no exhaustion tracking or cooldown; each key is
assumed interchangeable with the others.
"""
import logging
import threading
from typing import List, Optional, Sequence

logger = logging.getLogger("stylecomplete.keys")


class KeyRotator:
    """Thread-safe round-robin pool of API keys."""

    def __init__(self, api_keys: Sequence[str]):
        self.api_keys: List[str] = list(api_keys)
        self.current_key_index = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self.api_keys)

    def next_key(self) -> Optional[str]:
        """
        Return the key under the cursor and advance it.

        Returns None (and logs an error) when the pool is empty.
        """
        if not self.api_keys:
            logger.error("❌ No Gemini API keys configured")
            return None

        with self._lock:
            index = self.current_key_index
            self.current_key_index = (index + 1) % len(self.api_keys)

        logger.debug("Using Gemini key #%d of %d", index + 1, len(self.api_keys))
        return self.api_keys[index].strip()
