"""Exception hierarchy for sessionkeeper."""

from typing import Optional


class SessionKeeperError(Exception):
    """Base class for all sessionkeeper errors."""


class ConfigurationError(SessionKeeperError):
    """Invalid configuration file or value."""


class StoreUnavailableError(SessionKeeperError):
    """The session directory cannot be enumerated at all."""

    def __init__(self, session_dir: str, reason: str) -> None:
        self.session_dir = session_dir
        self.reason = reason
        super().__init__(f"Cannot read session directory {session_dir}: {reason}")


class EntryUnreadableError(SessionKeeperError):
    """Session entries could not be read.

    Single unreadable entries are skipped during a scan; this is only raised
    when every entry found in the store failed.
    """

    def __init__(self, session_dir: str, failed: int) -> None:
        self.session_dir = session_dir
        self.failed = failed
        super().__init__(
            f"All {failed} session files in {session_dir} are unreadable"
        )


class NoActiveSessionError(SessionKeeperError):
    def __init__(self) -> None:
        super().__init__(
            "No session is currently open - specify session name as an argument"
        )


class SessionNotFoundError(SessionKeeperError):
    """Resolution produced no candidate session."""

    def __init__(self, message: str, name: Optional[str] = None) -> None:
        self.name = name
        super().__init__(message)


class InvalidSessionNameError(SessionKeeperError, ValueError):
    """A session name that cannot name a session, such as an empty string."""


class UnknownFieldError(SessionKeeperError, ValueError):
    """Filter or sort on a field that session records do not have."""

    def __init__(self, field: str, known: tuple[str, ...]) -> None:
        self.field = field
        super().__init__(
            f"Unknown session field {field!r} (expected one of: {', '.join(known)})"
        )
