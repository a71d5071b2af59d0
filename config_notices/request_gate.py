"""
Decides which requests get a configuration audit.

The checks touch the filesystem and import optional libraries, so they only
run on a handful of backend pages, and only for the top-level request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

SUB_REQUEST_ENVIRON_KEY = "config_notices.sub_request"

AUDITED_ROUTES = (
    "dashboard",
    "login",
    "userfirst",
)

# Routes where a session-breaking host problem blocks signing in.
ESCALATION_ROUTES = (
    "login",
    "userfirst",
)


@dataclass(frozen=True)
class RequestMeta:
    """The slice of an inbound request the gate and the checks need."""

    route: Optional[str]
    host: str
    base_path: str = ""
    is_master_request: bool = True

    @classmethod
    def from_request(cls, request) -> "RequestMeta":
        return cls(
            route=request.endpoint,
            host=request.host or "",
            base_path=request.script_root or "",
            is_master_request=not request.environ.get(SUB_REQUEST_ENVIRON_KEY),
        )


class RequestGate:
    """Allow-list gate in front of the auditor."""

    def __init__(self, routes: Optional[Iterable[str]] = None):
        self.routes = frozenset(routes if routes is not None else AUDITED_ROUTES)

    def should_run(self, meta: RequestMeta) -> bool:
        if not meta.is_master_request:
            return False
        return meta.route in self.routes

    @staticmethod
    def escalates(route: Optional[str]) -> bool:
        return route in ESCALATION_ROUTES


def parse_routes(raw) -> tuple[str, ...]:
    """Normalize a comma-separated string or iterable of route names."""
    if raw is None:
        return AUDITED_ROUTES
    if isinstance(raw, str):
        raw = raw.replace(";", ",").split(",")
    routes = tuple(entry.strip() for entry in raw if entry and entry.strip())
    return routes or AUDITED_ROUTES


__all__ = [
    "SUB_REQUEST_ENVIRON_KEY",
    "AUDITED_ROUTES",
    "ESCALATION_ROUTES",
    "RequestMeta",
    "RequestGate",
    "parse_routes",
]
