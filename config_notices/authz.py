from __future__ import annotations

import logging
from typing import Iterable

from flask import current_app
from flask_login import UserMixin

from .extensions import login_manager

logger = logging.getLogger(__name__)


class ConfiguredUser(UserMixin):
    """A user declared in the ``USERS`` config mapping."""

    def __init__(self, user_id: str, permissions: Iterable[str] = ()):
        self.id = str(user_id)
        self.permissions = frozenset(permissions)

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions


def configure_login_manager(app):
    """Attach Flask-Login with a loader backed by the ``USERS`` config."""
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id: str):
        users = current_app.config.get("USERS") or {}
        entry = users.get(user_id)
        if entry is None:
            try:
                entry = users.get(int(user_id))
            except (TypeError, ValueError):
                return None
        if entry is None:
            return None
        return ConfiguredUser(user_id, (entry or {}).get("permissions", ()))


def is_allowed(user, permission: str) -> bool:
    """Return True when an authenticated *user* holds *permission*."""
    if user is None or not getattr(user, "is_authenticated", False):
        return False
    checker = getattr(user, "has_permission", None)
    if callable(checker):
        return bool(checker(permission))
    return permission in (getattr(user, "permissions", None) or ())
