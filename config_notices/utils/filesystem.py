from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

PathType = Union[str, os.PathLike[str]]


class FilesystemError(OSError):
    """Raised for any failed operation on a scoped filesystem."""


class LocalFilesystem:
    """A directory-scoped filesystem: every path is relative to *root*."""

    def __init__(self, root: PathType):
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        root = self.root.resolve()
        target = (root / path.lstrip("/")).resolve()
        if target != root and root not in target.parents:
            raise FilesystemError(f"Path {path!r} escapes filesystem root {str(root)!r}")
        return target

    def put(self, path: str, content: str) -> None:
        """Atomically write *content* to *path*. The parent folder must exist."""
        target = self._resolve(path)
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=str(target.parent))
        except OSError as exc:
            raise FilesystemError(f"Unable to write {path!r}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(content)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(tmp_name, target)
        except OSError as exc:
            raise FilesystemError(f"Unable to write {path!r}: {exc}") from exc
        finally:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass

    def read(self, path: str) -> str:
        target = self._resolve(path)
        try:
            return target.read_text(encoding="utf-8")
        except OSError as exc:
            raise FilesystemError(f"Unable to read {path!r}: {exc}") from exc

    def delete(self, path: str) -> None:
        target = self._resolve(path)
        try:
            target.unlink()
        except OSError as exc:
            raise FilesystemError(f"Unable to delete {path!r}: {exc}") from exc


# --- Probe result ---
# Purpose: Report a write/read/delete round trip without raising.
# Inputs: N/A.
# Outputs: ok flag, content read back (if any), first error (if any).
@dataclass(frozen=True)
class ProbeResult:
    ok: bool
    content: Optional[str] = None
    error: Optional[str] = None


def probe_round_trip(filesystem, path: str, payload: str) -> ProbeResult:
    """Write *payload* to *path*, read it back and delete it.

    The delete is always attempted, whatever happened before it.
    """
    content: Optional[str] = None
    error: Optional[Exception] = None
    written = False
    try:
        filesystem.put(path, payload)
        written = True
        content = filesystem.read(path)
    except Exception as exc:
        error = exc
    finally:
        try:
            filesystem.delete(path)
        except Exception as exc:
            if written and error is None:
                error = exc
            elif written:
                logger.warning("Probe file %s could not be removed: %s", path, exc)

    if error is not None:
        logger.debug("Filesystem probe on %s failed: %s", path, error)
        return ProbeResult(ok=False, content=content, error=str(error))
    if content != payload:
        return ProbeResult(ok=False, content=content, error="content mismatch")
    return ProbeResult(ok=True, content=content)


__all__ = ["FilesystemError", "LocalFilesystem", "ProbeResult", "probe_round_trip"]
