from __future__ import annotations

import logging
from typing import Any, Dict, List

from flask import Flask, get_flashed_messages

from .notices.models import Notice
from .notices.sink import CONFIGURATION_CATEGORY, ERROR_CATEGORY

logger = logging.getLogger(__name__)


def configuration_notices() -> List[Notice]:
    """Decode the configuration flashes queued for this request."""
    notices: List[Notice] = []
    for raw in get_flashed_messages(category_filter=[CONFIGURATION_CATEGORY]):
        try:
            notices.append(Notice.from_json(raw))
        except ValueError as exc:
            logger.warning("Dropping malformed configuration notice: %s", exc)
    return notices


def configuration_errors() -> List[str]:
    return list(get_flashed_messages(category_filter=[ERROR_CATEGORY]))


def register_template_context(app: Flask) -> None:
    """Register globally available template context helpers."""

    @app.context_processor
    def _inject_configuration_notices() -> Dict[str, Any]:
        return {
            "configuration_notices": configuration_notices,
            "configuration_errors": configuration_errors,
        }
