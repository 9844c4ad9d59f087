"""Data models for session discovery."""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class SessionRecord:
    """Metadata of one persisted session.

    ``file_id`` identifies the backing file and is what the cache is keyed
    by; ``name`` is the human-chosen session name stored inside it.
    """

    name: str
    cwd: str
    mtime: float  # seconds since epoch
    file_id: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


# Fields that filter_by/sort_by accept
RECORD_FIELDS: tuple[str, ...] = ("name", "cwd", "mtime", "file_id")
