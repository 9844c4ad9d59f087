"""Session service: owns the cache and exposes the consumer operations."""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, Optional

import structlog

from sessionkeeper.exceptions import SessionNotFoundError
from sessionkeeper.sessions.cache import SessionCache
from sessionkeeper.sessions.models import SessionRecord
from sessionkeeper.sessions.query import as_list, filter_by, sort_by
from sessionkeeper.sessions.resolver import (
    ActiveSessionProvider,
    Selector,
    SessionResolver,
    selector_from_autoload,
)
from sessionkeeper.sessions.store import SessionStore

logger = structlog.get_logger()


class SessionService:
    """Composes store, cache and resolver for the CLI/UI layer."""

    def __init__(
        self,
        store: SessionStore,
        active_session: Optional[ActiveSessionProvider] = None,
        cwd_provider: Callable[[], str] = os.getcwd,
    ) -> None:
        self.store = store
        self.cache = SessionCache(store)
        self.resolver = SessionResolver(
            self.cache,
            active_session=active_session,
            cwd_provider=cwd_provider,
            extension=store.extension,
        )
        self._cwd_provider = cwd_provider

    def resolve(self, selector: Selector) -> str:
        return self.resolver.resolve(selector)

    def query(
        self,
        filter_fields: Optional[Mapping[str, Any]] = None,
        sort_field: Optional[str] = None,
        descending: bool = False,
    ) -> list[SessionRecord]:
        """List sessions, optionally filtered and sorted.

        Without ``sort_field`` records come back in store order.
        """
        records = as_list(self.cache.get_records())
        if filter_fields:
            records = filter_by(records, filter_fields)
        if sort_field is not None:
            sort_by(records, sort_field, descending)
        return records

    def sessions_for_dir(self, directory: Optional[str] = None) -> list[SessionRecord]:
        """Sessions saved in ``directory`` (default: working directory)."""
        return self.resolver.sessions_for_dir(directory or self._cwd_provider())

    def names(self) -> list[str]:
        return sorted(self.cache.get_names().values())

    def complete(self, prefix: str = "") -> list[str]:
        """Session names starting with ``prefix``, sorted."""
        return [name for name in self.names() if name.startswith(prefix)]

    def require_existing(self, name: str) -> str:
        """Check the store before a destructive action on ``name``.

        Raises:
            SessionNotFoundError: No session file for ``name``
        """
        if not self.store.exists(name):
            raise SessionNotFoundError(f'Session "{name}" does not exist', name=name)
        return name

    def autoload(self, value: Any) -> Optional[str]:
        """Name of the session to load at startup, or None.

        Returns None when autoloading is disabled or no session matches.
        """
        selector = selector_from_autoload(value)
        if selector is None:
            return None
        try:
            return self.resolve(selector)
        except SessionNotFoundError:
            logger.info("No session found to autoload", autoload=repr(value))
            return None

    def invalidate(self) -> None:
        self.cache.invalidate()

    @contextmanager
    def interaction(self) -> Iterator["SessionService"]:
        """Scope of one user interaction; the cache is invalidated when it ends.

        The interaction may have saved, renamed or deleted sessions.
        """
        try:
            yield self
        finally:
            self.invalidate()
