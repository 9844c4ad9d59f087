"""Snapshot cache over the session store.

Limits filesystem access: the store is scanned at most once between
invalidations. Staleness between invalidations is expected; the owner calls
``invalidate()`` whenever a user interaction may have changed the store.
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Mapping, Optional, Protocol

import structlog

from sessionkeeper.sessions.models import SessionRecord

logger = structlog.get_logger()


class SessionSource(Protocol):
    """Anything that can enumerate sessions, normally a SessionStore."""

    def list(self) -> Mapping[str, SessionRecord]: ...


class _Snapshot:
    """One complete scan result. Never mutated after construction."""

    __slots__ = ("records", "names")

    def __init__(self, records: Mapping[str, SessionRecord]) -> None:
        self.records: Mapping[str, SessionRecord] = MappingProxyType(dict(records))
        self.names: Mapping[str, str] = MappingProxyType(
            {file_id: record.name for file_id, record in records.items()}
        )


class SessionCache:
    """Caches the store listing until explicitly invalidated."""

    def __init__(self, source: SessionSource) -> None:
        self._source = source
        self._snapshot: Optional[_Snapshot] = None
        self._lock = threading.RLock()
        self.scan_count = 0

    def get_names(self) -> Mapping[str, str]:
        """Mapping of file id to session name from the current snapshot."""
        return self._get_snapshot().names

    def get_records(self) -> Mapping[str, SessionRecord]:
        """Mapping of file id to full session record from the current snapshot."""
        return self._get_snapshot().records

    def invalidate(self) -> None:
        """Drop the snapshot; the next access rescans the store."""
        with self._lock:
            if self._snapshot is not None:
                logger.debug("Session cache invalidated")
            self._snapshot = None

    @property
    def is_populated(self) -> bool:
        return self._snapshot is not None

    def _get_snapshot(self) -> _Snapshot:
        with self._lock:
            snapshot = self._snapshot
            if snapshot is None:
                # A store failure propagates and leaves the cache empty
                snapshot = _Snapshot(self._source.list())
                self.scan_count += 1
                self._snapshot = snapshot
                logger.debug(
                    "Session cache rebuilt",
                    session_count=len(snapshot.records),
                    scan_count=self.scan_count,
                )
            return snapshot
