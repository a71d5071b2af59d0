from __future__ import annotations

import logging

from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

__version__ = "1.0.0"


def is_stable_release(version: str | None = None) -> bool:
    """Return True when *version* is a final PEP 440 release like ``1.4.2``."""
    candidate = (version if version is not None else __version__).strip()
    try:
        parsed = Version(candidate)
    except InvalidVersion:
        logger.debug("Unparseable application version %r treated as unstable", candidate)
        return False
    return not (parsed.is_prerelease or parsed.is_devrelease)
