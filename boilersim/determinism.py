"""
Determinism utilities.

Provides a freezable clock and content-based hashing so that simulation
records can be reproduced and compared byte for byte.

Features:
- Controlled timestamp generation with freezable clock
- Deterministic ID generation using content-based hashing
- Canonical JSON serialization (sorted keys, compact separators)
"""

import hashlib
import json
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Optional, Union


class DeterministicClock:
    """
    A clock that can be frozen for testing and auditing.

    All timestamps in boilersim (provenance records, exception context)
    come from this clock.
    """

    _instance = None
    _lock = threading.Lock()
    _frozen_time: Optional[datetime] = None

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
            return cls._instance

    @classmethod
    def now(cls, tz=None) -> datetime:
        """
        Get current time, either real or frozen.

        Args:
            tz: Timezone info (defaults to UTC)

        Returns:
            Current datetime without microseconds
        """
        instance = cls()
        if instance._frozen_time is not None:
            if tz is not None:
                return instance._frozen_time.replace(tzinfo=tz)
            return instance._frozen_time
        return datetime.now(tz or timezone.utc).replace(microsecond=0)

    @classmethod
    def utcnow(cls) -> datetime:
        """Get current UTC time."""
        return cls.now(timezone.utc)

    @classmethod
    def freeze(cls, frozen_time: Optional[datetime] = None):
        """Freeze clock at a specific time (defaults to now)."""
        instance = cls()
        if frozen_time is None:
            frozen_time = datetime.now(timezone.utc).replace(microsecond=0)
        instance._frozen_time = frozen_time

    @classmethod
    def unfreeze(cls):
        """Unfreeze the clock."""
        instance = cls()
        instance._frozen_time = None

    @classmethod
    @contextmanager
    def frozen(cls, frozen_time: Optional[datetime] = None):
        """
        Context manager for temporarily freezing time.

        Usage:
            with DeterministicClock.frozen(datetime(2025, 1, 1)):
                # All timestamps will be 2025-01-01
                pass
        """
        cls.freeze(frozen_time)
        try:
            yield
        finally:
            cls.unfreeze()


def canonical_json(content: Any) -> str:
    """Serialize content with sorted keys and compact separators.

    Non-finite floats serialize as ``Infinity``/``NaN``; values that are not
    JSON types fall back to ``str``.
    """
    return json.dumps(
        content,
        sort_keys=True,
        separators=(',', ':'),
        ensure_ascii=True,
        default=str,
    )


def content_hash(content: Union[str, bytes, dict, list]) -> str:
    """
    Generate SHA-256 hash of content for provenance tracking.

    Args:
        content: Content to hash

    Returns:
        Full SHA-256 hash hex string
    """
    if isinstance(content, (dict, list)):
        content = canonical_json(content)

    if isinstance(content, str):
        content = content.encode('utf-8')

    return hashlib.sha256(content).hexdigest()


def deterministic_id(content: Union[str, bytes, dict, list], prefix: str = "") -> str:
    """
    Generate deterministic ID from content using SHA-256 hashing.

    Examples:
        >>> deterministic_id({"key": "value"}, "sim_")  # doctest: +SKIP
        'sim_e43abcf3375244...'
    """
    return f"{prefix}{content_hash(content)[:16]}"


__all__ = [
    'DeterministicClock',
    'canonical_json',
    'content_hash',
    'deterministic_id',
]
