"""Session store adapter.

Reads the session directory, one ``<name>.json`` file per session:

    {"name": "work", "cwd": "/home/me/work", ...}

Only ``name`` and ``cwd`` are read; the modification time comes from the
file itself. Everything else in the file belongs to the session loader.
"""

import json
import stat
from pathlib import Path
from typing import Union

import structlog

from sessionkeeper.exceptions import EntryUnreadableError, StoreUnavailableError
from sessionkeeper.sessions.models import SessionRecord
from sessionkeeper.sessions.paths import DEFAULT_EXTENSION, session_path

logger = structlog.get_logger()

REQUIRED_FIELDS = ("name", "cwd")


class SessionStore:
    """Enumerates session files in a directory. Never writes."""

    def __init__(
        self, session_dir: Union[str, Path], extension: str = DEFAULT_EXTENSION
    ) -> None:
        self.session_dir = Path(session_dir).expanduser().absolute()
        self.extension = extension

    def path_for(self, name: str) -> Path:
        """Location of the file backing session ``name``."""
        return session_path(self.session_dir, name, self.extension)

    def exists(self, name: str) -> bool:
        """Check whether a session file for ``name`` is present."""
        return self.path_for(name).is_file()

    def list(self) -> dict[str, SessionRecord]:
        """Scan the session directory.

        Files are visited in sorted path order so the returned mapping has a
        stable insertion order regardless of how the filesystem lists them.
        Unreadable entries are skipped.

        Returns:
            Mapping of file id (absolute file path) to session record

        Raises:
            StoreUnavailableError: The directory cannot be reached or listed
            EntryUnreadableError: Every session file found was unreadable
        """
        try:
            dir_stat = self.session_dir.stat()
        except FileNotFoundError:
            logger.debug("Session directory not found", path=str(self.session_dir))
            return {}
        except OSError as e:
            raise StoreUnavailableError(str(self.session_dir), str(e)) from e

        if not stat.S_ISDIR(dir_stat.st_mode):
            raise StoreUnavailableError(str(self.session_dir), "not a directory")

        try:
            candidates = sorted(
                path
                for path in self.session_dir.iterdir()
                if path.name.endswith(self.extension)
            )
        except OSError as e:
            raise StoreUnavailableError(str(self.session_dir), str(e)) from e

        records: dict[str, SessionRecord] = {}
        found = 0
        failed = 0

        for path in candidates:
            if not path.is_file():
                continue
            found += 1
            try:
                record = self._read_entry(path)
            except (OSError, ValueError, TypeError) as e:
                logger.warning(
                    "Skipping unreadable session file",
                    path=str(path),
                    error=str(e),
                )
                failed += 1
                continue
            records[record.file_id] = record

        if found and failed == found:
            raise EntryUnreadableError(str(self.session_dir), failed)

        if failed:
            logger.info(
                "Skipped unreadable session files",
                count=failed,
                total_entries=found,
            )

        logger.debug(
            "Scanned session directory",
            path=str(self.session_dir),
            session_count=len(records),
        )
        return records

    def _read_entry(self, path: Path) -> SessionRecord:
        """Parse one session file.

        Raises:
            OSError: File vanished or cannot be read
            ValueError: Invalid JSON or missing/invalid fields
        """
        mtime = path.stat().st_mtime
        data = json.loads(path.read_text())

        if not isinstance(data, dict):
            raise ValueError("session file does not contain a JSON object")

        missing_fields = [field for field in REQUIRED_FIELDS if field not in data]
        if missing_fields:
            raise ValueError(f"missing fields: {', '.join(missing_fields)}")

        name, cwd = data["name"], data["cwd"]
        if not isinstance(name, str) or not name:
            raise ValueError("'name' must be a non-empty string")
        if not isinstance(cwd, str):
            raise ValueError("'cwd' must be a string")

        return SessionRecord(name=name, cwd=cwd, mtime=mtime, file_id=str(path))
