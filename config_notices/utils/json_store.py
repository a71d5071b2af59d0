from __future__ import annotations

import contextlib
import copy
import json
import os
from pathlib import Path
from typing import Any, Iterator, Union

try:  # pragma: no cover - Windows fallback
    import fcntl
except ImportError:  # pragma: no cover
    fcntl = None

PathType = Union[str, os.PathLike[str]]

__all__ = ["read_json_file"]


@contextlib.contextmanager
def _shared_lock(lock_path: Path) -> Iterator[None]:
    """
    Cross-process advisory read lock using ``fcntl`` when available.

    Without ``fcntl`` (e.g., Windows) the lock is a no-op.
    """
    if fcntl is None:
        yield
        return

    lock_path.parent.mkdir(parents=True, exist_ok=True)
    with lock_path.open("a") as lock_file:
        fcntl.flock(lock_file.fileno(), fcntl.LOCK_SH)
        try:
            yield
        finally:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)


def _clone_default(default: Any) -> Any:
    return copy.deepcopy(default) if default is not None else default


def read_json_file(path: PathType, default: Any = None) -> Any:
    """
    Read a JSON file with shared locking and safe fallbacks.

    Args:
        path: File path to read from.
        default: Value returned when the file is missing or invalid.
    """
    file_path = Path(path)
    if not file_path.exists():
        return _clone_default(default)

    lock_path = file_path.with_suffix(file_path.suffix + ".lock")

    with _shared_lock(lock_path):
        try:
            with file_path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (json.JSONDecodeError, FileNotFoundError):
            return _clone_default(default)
