"""Path helpers for session files and session directories.

Everything here is pure path arithmetic. The only environment read is the
current working directory when a relative path has to be anchored.
"""

import os
from pathlib import Path
from typing import Optional, Union

DEFAULT_EXTENSION = ".json"

# Path separators are not allowed in file names, so directory-derived
# session names encode them.
CWD_NAME_SEPARATOR = "%"


def absolute_dir(path: Union[str, Path], cwd: Optional[str] = None) -> str:
    """Canonicalize a directory path.

    Expands ``~``, anchors relative paths on ``cwd`` (the process working
    directory by default) and collapses ``.``/``..`` segments and trailing
    separators. Symlinks are left alone so the result matches what was
    recorded when the session was saved.

    Args:
        path: Absolute or relative directory path
        cwd: Directory to resolve relative paths against

    Returns:
        Normalized absolute path string
    """
    expanded = os.path.expanduser(str(path))
    if not os.path.isabs(expanded):
        base = cwd if cwd is not None else os.getcwd()
        expanded = os.path.join(base, expanded)
    return os.path.normpath(expanded)


def strip_extension(value: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Remove one trailing session file extension, if present."""
    if extension and value.endswith(extension) and value != extension:
        return value[: -len(extension)]
    return value


def session_path(
    session_dir: Path, name: str, extension: str = DEFAULT_EXTENSION
) -> Path:
    """Location of the file backing session ``name``."""
    return session_dir / f"{name}{extension}"


def cwd_session_name(cwd: Optional[str] = None) -> str:
    """Session name used for a working directory.

    '/home/me/project' becomes '%home%me%project'.
    """
    directory = absolute_dir(cwd if cwd is not None else os.getcwd())
    return directory.replace(os.sep, CWD_NAME_SEPARATOR)
