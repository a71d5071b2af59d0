"""Read-only environment snapshot consumed by the checks.

Every collaborator (settings, authorization, version metadata, runtime
capabilities, filesystem) is passed in explicitly so a snapshot can be built
by hand in tests. ``snapshot_from_request`` is the single Flask adapter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Tuple

from ..request_gate import RequestMeta

logger = logging.getLogger(__name__)

MANAGE_CONFIG_PERMISSION = "files:config"

MAIL_OPTIONS_KEY = "general/mailoptions"
DEBUG_LOCAL_DOMAINS_KEY = "general/debug_local_domains"
THUMBNAILS_SAVE_FILES_KEY = "general/thumbnails/save_files"
MAINTENANCE_MODE_KEY = "general/maintenance_mode"


class ConfigStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...


class AuthProvider(Protocol):
    def is_authenticated(self) -> bool: ...

    def is_allowed(self, permission: str) -> bool: ...


class CapabilityProbe(Protocol):
    def module_available(self, module: str) -> bool: ...

    def function_exists(self, module: str, name: str) -> bool: ...

    def class_exists(self, module: str, name: str) -> bool: ...


class Filesystem(Protocol):
    def put(self, path: str, content: str) -> None: ...

    def read(self, path: str) -> str: ...

    def delete(self, path: str) -> None: ...


# --- Environment snapshot ---
# Purpose: Freeze the request/config/runtime facts for one audit pass.
# Inputs: request metadata plus values read from injected collaborators.
# Outputs: Immutable record; capability and filesystem probes stay live.
@dataclass(frozen=True)
class EnvironmentSnapshot:
    route: Optional[str]
    host: str
    base_path: str = ""
    debug: bool = False
    mail_configured: bool = True
    debug_local_domains: Tuple[str, ...] = ()
    thumbnails_save_files: bool = False
    maintenance_mode: bool = False
    stable_release: bool = True
    user_authenticated: bool = False
    user_can_manage_config: bool = False
    capabilities: Optional[CapabilityProbe] = None
    filesystem: Optional[Filesystem] = None


def _as_domain_list(raw: Any) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = [raw]
    try:
        return tuple(str(entry) for entry in raw if entry)
    except TypeError:
        return (str(raw),)


def _safe_flag(probe: Callable[[], Any], label: str) -> bool:
    try:
        return bool(probe())
    except Exception as exc:
        logger.warning("Could not determine %s for configuration audit: %s", label, exc)
        return False


def build_snapshot(
    meta: RequestMeta,
    *,
    config: ConfigStore,
    debug: bool,
    auth: Optional[AuthProvider] = None,
    is_stable: Callable[[], bool] = lambda: True,
    capabilities: Optional[CapabilityProbe] = None,
    filesystem: Optional[Filesystem] = None,
) -> EnvironmentSnapshot:
    """Read every collaborator once and return the frozen snapshot."""
    authenticated = auth is not None and _safe_flag(auth.is_authenticated, "authentication")
    can_manage = authenticated and _safe_flag(
        lambda: auth.is_allowed(MANAGE_CONFIG_PERMISSION), "config permission"
    )
    stable = True
    try:
        stable = bool(is_stable())
    except Exception as exc:
        logger.warning("Could not determine release stability: %s", exc)

    return EnvironmentSnapshot(
        route=meta.route,
        host=meta.host,
        base_path=meta.base_path or "",
        debug=bool(debug),
        mail_configured=bool(config.get(MAIL_OPTIONS_KEY)),
        debug_local_domains=_as_domain_list(config.get(DEBUG_LOCAL_DOMAINS_KEY, [])),
        thumbnails_save_files=bool(config.get(THUMBNAILS_SAVE_FILES_KEY, False)),
        maintenance_mode=bool(config.get(MAINTENANCE_MODE_KEY, False)),
        stable_release=stable,
        user_authenticated=authenticated,
        user_can_manage_config=can_manage,
        capabilities=capabilities,
        filesystem=filesystem,
    )


class FlaskUserAuth:
    """AuthProvider over a Flask-Login user object."""

    def __init__(self, user):
        self.user = user

    def is_authenticated(self) -> bool:
        return bool(getattr(self.user, "is_authenticated", False))

    def is_allowed(self, permission: str) -> bool:
        from ..authz import is_allowed

        return is_allowed(self.user, permission)


def app_collaborators(app) -> dict:
    """The non-request collaborators of a Flask app, freshly loaded."""
    from ..utils.capabilities import RuntimeCapabilities
    from ..utils.filesystem import LocalFilesystem
    from ..utils.settings import SettingsStore
    from ..version import is_stable_release

    settings = SettingsStore.load(
        app.config.get("SETTINGS_FILE"),
        overrides=app.config.get("SITE_SETTINGS") or {},
    )
    web_root = app.config.get("WEB_ROOT") or app.static_folder
    version = app.config.get("APP_VERSION")

    return {
        "config": settings,
        "is_stable": lambda: is_stable_release(version),
        "capabilities": RuntimeCapabilities(),
        "filesystem": LocalFilesystem(web_root) if web_root else None,
    }


def snapshot_from_request(app, request, user) -> EnvironmentSnapshot:
    """Assemble a snapshot from the live Flask app, request and user."""
    return build_snapshot(
        RequestMeta.from_request(request),
        debug=app.debug,
        auth=FlaskUserAuth(user),
        **app_collaborators(app),
    )


__all__ = [
    "MANAGE_CONFIG_PERMISSION",
    "ConfigStore",
    "AuthProvider",
    "CapabilityProbe",
    "Filesystem",
    "EnvironmentSnapshot",
    "FlaskUserAuth",
    "app_collaborators",
    "build_snapshot",
    "snapshot_from_request",
]
