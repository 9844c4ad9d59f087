"""Session discovery, caching, querying and resolution."""

from .cache import SessionCache
from .models import RECORD_FIELDS, SessionRecord
from .query import as_list, filter_by, sort_by
from .resolver import (
    Current,
    CwdSession,
    EnvironmentActiveSession,
    Explicit,
    LastForDirectory,
    LastGlobal,
    LiteralOrDirectory,
    Selector,
    SessionResolver,
    StaticActiveSession,
    name_or,
    selector_from_autoload,
)
from .service import SessionService
from .store import SessionStore

__all__ = [
    # Components
    "SessionCache",
    "SessionResolver",
    "SessionService",
    "SessionStore",
    # Records and queries
    "RECORD_FIELDS",
    "SessionRecord",
    "as_list",
    "filter_by",
    "sort_by",
    # Selectors
    "Current",
    "CwdSession",
    "Explicit",
    "LastForDirectory",
    "LastGlobal",
    "LiteralOrDirectory",
    "Selector",
    "name_or",
    "selector_from_autoload",
    # Active session providers
    "EnvironmentActiveSession",
    "StaticActiveSession",
]
