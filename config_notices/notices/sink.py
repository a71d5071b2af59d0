from __future__ import annotations

from typing import List, Protocol

from flask import flash

from .models import Notice

CONFIGURATION_CATEGORY = "configuration"
ERROR_CATEGORY = "error"


class NoticeSink(Protocol):
    def configuration(self, notice: Notice) -> None: ...

    def error(self, message: str) -> None: ...


class FlashNoticeSink:
    """Writes notices to Flask's flash store, one category per channel."""

    def configuration(self, notice: Notice) -> None:
        flash(notice.to_json(), CONFIGURATION_CATEGORY)

    def error(self, message: str) -> None:
        flash(message, ERROR_CATEGORY)


class MemoryNoticeSink:
    """Collects notices in memory (CLI output, tests)."""

    def __init__(self):
        self.notices: List[Notice] = []
        self.errors: List[str] = []

    def configuration(self, notice: Notice) -> None:
        self.notices.append(notice)

    def error(self, message: str) -> None:
        self.errors.append(message)


__all__ = [
    "CONFIGURATION_CATEGORY",
    "ERROR_CATEGORY",
    "NoticeSink",
    "FlashNoticeSink",
    "MemoryNoticeSink",
]
