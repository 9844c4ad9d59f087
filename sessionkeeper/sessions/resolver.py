"""Resolve a session selector to one concrete session name.

A selector says how the caller wants the session chosen: by explicit name,
the currently open session, the most recent session overall or for a
directory, the session named after a directory, or a user supplied string
that may be either a directory or a literal name.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union

import structlog

from sessionkeeper.exceptions import (
    ConfigurationError,
    InvalidSessionNameError,
    NoActiveSessionError,
    SessionNotFoundError,
)
from sessionkeeper.sessions.cache import SessionCache
from sessionkeeper.sessions.models import SessionRecord
from sessionkeeper.sessions.paths import (
    DEFAULT_EXTENSION,
    absolute_dir,
    cwd_session_name,
    strip_extension,
)
from sessionkeeper.sessions.query import as_list, filter_by, sort_by

logger = structlog.get_logger()


@dataclass(frozen=True)
class Explicit:
    """A session given by name. Existence is not checked."""

    name: str


@dataclass(frozen=True)
class Current:
    """The session that is currently open."""


@dataclass(frozen=True)
class LastGlobal:
    """The most recently modified session."""


@dataclass(frozen=True)
class LastForDirectory:
    """The most recently modified session saved in ``directory``."""

    directory: str


@dataclass(frozen=True)
class LiteralOrDirectory:
    """A directory if one exists at ``value``, otherwise a literal name."""

    value: str


@dataclass(frozen=True)
class CwdSession:
    """The session named after a working directory (default: cwd)."""

    directory: Optional[str] = None


Selector = Union[
    Explicit, Current, LastGlobal, LastForDirectory, LiteralOrDirectory, CwdSession
]

# Autoload values with a fixed meaning; any other string is a literal or dir
AUTOLOAD_LAST = "last"
AUTOLOAD_AUTO_CWD = "auto_cwd"
AUTOLOAD_LAST_CWD = "last_cwd"


class ActiveSessionProvider(Protocol):
    def current_name(self) -> Optional[str]: ...


class StaticActiveSession:
    """Active session known up front (or none)."""

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name

    def current_name(self) -> Optional[str]:
        return self.name or None


class EnvironmentActiveSession:
    """Active session name published by the editor in an environment variable."""

    def __init__(self, variable: str) -> None:
        self.variable = variable

    def current_name(self) -> Optional[str]:
        return os.environ.get(self.variable) or None


def name_or(
    name: Optional[str], fallback: Callable[[], Optional[str]]
) -> Optional[str]:
    """Return ``name`` if one was given, otherwise whatever ``fallback`` yields."""
    if name is not None and name != "":
        return name
    return fallback()


def selector_from_autoload(
    value: Union[str, bool, None, Callable[[], Union[str, bool, None]]],
) -> Optional[Selector]:
    """Map an ``autoload`` configuration value to a selector.

    ``False``/``None`` disable autoloading. ``"last"``, ``"auto_cwd"`` and
    ``"last_cwd"`` pick a strategy; any other string is treated as a
    directory or a literal session name. A callable is called and its
    result mapped the same way.

    Raises:
        ConfigurationError: The value is of an unsupported type
    """
    if callable(value):
        value = value()

    if value is None or value is False:
        return None
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"Unknown autoload value {value!r}")

    if value == AUTOLOAD_LAST:
        return LastGlobal()
    if value == AUTOLOAD_AUTO_CWD:
        return CwdSession()
    if value == AUTOLOAD_LAST_CWD:
        return LastForDirectory(os.curdir)
    return LiteralOrDirectory(value)


class SessionResolver:
    """Turns selectors into session names using the cached store listing."""

    def __init__(
        self,
        cache: SessionCache,
        active_session: Optional[ActiveSessionProvider] = None,
        cwd_provider: Callable[[], str] = os.getcwd,
        extension: str = DEFAULT_EXTENSION,
    ) -> None:
        self._cache = cache
        self._active_session = active_session or StaticActiveSession()
        self._cwd_provider = cwd_provider
        self._extension = extension

    def resolve(self, selector: Selector) -> str:
        """Resolve ``selector`` to a session name.

        Raises:
            InvalidSessionNameError: ``Explicit`` with an empty name
            NoActiveSessionError: ``Current`` with no session open
            SessionNotFoundError: No session matches
            TypeError: ``selector`` is not a known selector
        """
        name = self._dispatch(selector)
        logger.debug("Resolved session selector", selector=repr(selector), name=name)
        return name

    def _dispatch(self, selector: Selector) -> str:
        if isinstance(selector, Explicit):
            if not selector.name:
                raise InvalidSessionNameError("Session name must not be empty")
            return selector.name

        if isinstance(selector, Current):
            current = self._active_session.current_name()
            if current is None:
                raise NoActiveSessionError()
            return current

        if isinstance(selector, LastGlobal):
            last = self.last()
            if last is None:
                raise SessionNotFoundError("No sessions found")
            return last

        if isinstance(selector, LastForDirectory):
            return self._last_for_directory(selector.directory)

        if isinstance(selector, LiteralOrDirectory):
            candidate = absolute_dir(selector.value, cwd=self._cwd_provider())
            if os.path.isdir(candidate):
                return self._last_for_directory(candidate)
            # Plain name; the loader adds the extension back when needed
            return strip_extension(selector.value, self._extension)

        if isinstance(selector, CwdSession):
            directory = selector.directory or self._cwd_provider()
            return cwd_session_name(absolute_dir(directory, cwd=self._cwd_provider()))

        raise TypeError(f"Unsupported session selector: {selector!r}")

    def _last_for_directory(self, directory: str) -> str:
        abs_dir = absolute_dir(directory, cwd=self._cwd_provider())
        last = self.last(self.sessions_for_dir(abs_dir))
        if last is None:
            raise SessionNotFoundError(f"No session found for path {abs_dir}")
        return last

    def sessions_for_dir(self, directory: str) -> list[SessionRecord]:
        """Sessions saved in ``directory``, in store order."""
        abs_dir = absolute_dir(directory, cwd=self._cwd_provider())
        return filter_by(as_list(self._cache.get_records()), {"cwd": abs_dir})

    def last(self, records: Optional[list[SessionRecord]] = None) -> Optional[str]:
        """Name of the most recently modified record, or None if there are none."""
        if records is None:
            records = as_list(self._cache.get_records())
        else:
            records = list(records)
        if not records:
            return None
        sort_by(records, "mtime", descending=True)
        return records[0].name
