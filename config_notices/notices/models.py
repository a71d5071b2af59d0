"""Value types shared by the configuration checks.

Synopsis:
A check inspects an environment snapshot and may return a ``Finding``. The
finding wraps one immutable ``Notice`` (severity, message, optional info) and
says whether the message should also go to the error channel.

Glossary:
- Notice: one diagnostic, rendered as a configuration flash message.
- Escalation: the same notice written to the stronger error channel too.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

SEVERITY_NOTICE = 1
SEVERITY_URGENT = 2


# --- Notice ---
# Purpose: Carry a single diagnostic from a check to the flash store.
# Inputs: severity (open small-int enum), message markup, optional info.
# Outputs: Immutable value with a JSON payload form.
@dataclass(frozen=True)
class Notice:
    """A single configuration finding."""

    severity: int
    message: str
    info: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.severity, bool) or not isinstance(self.severity, int):
            raise ValueError(f"Notice severity must be an integer, got {self.severity!r}")
        if self.severity < SEVERITY_NOTICE:
            raise ValueError(f"Notice severity must be >= {SEVERITY_NOTICE}, got {self.severity}")
        if not isinstance(self.message, str) or not self.message.strip():
            raise ValueError("Notice message must be a non-empty string")
        if self.info is not None and not isinstance(self.info, str):
            raise ValueError("Notice info must be a string when provided")

    @property
    def full_text(self) -> str:
        if self.info:
            return f"{self.message} {self.info}"
        return self.message

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"severity": self.severity, "notice": self.message}
        if self.info is not None:
            payload["info"] = self.info
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_payload())

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Notice":
        return cls(
            severity=payload.get("severity", SEVERITY_NOTICE),
            message=payload.get("notice", ""),
            info=payload.get("info"),
        )

    @classmethod
    def from_json(cls, raw: str) -> "Notice":
        try:
            payload = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as exc:
            raise ValueError(f"Invalid notice payload: {exc}") from exc
        if not isinstance(payload, Mapping):
            raise ValueError("Notice payload must be a JSON object")
        return cls.from_payload(payload)


@dataclass(frozen=True)
class Finding:
    """What a check hands back to the auditor."""

    notice: Notice
    escalate: bool = False


# --- Audit report ---
# Purpose: Ordered result of one audit pass.
# Inputs: notices in registration order, escalated error messages.
# Outputs: Immutable report; iterating yields the notices.
@dataclass(frozen=True)
class AuditReport:
    notices: Tuple[Notice, ...] = field(default_factory=tuple)
    errors: Tuple[str, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Notice]:
        return iter(self.notices)

    def __len__(self) -> int:
        return len(self.notices)

    @property
    def is_clean(self) -> bool:
        return not self.notices and not self.errors


__all__ = [
    "SEVERITY_NOTICE",
    "SEVERITY_URGENT",
    "Notice",
    "Finding",
    "AuditReport",
]
