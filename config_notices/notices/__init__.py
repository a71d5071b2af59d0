from .auditor import Auditor
from .checks import Check, default_checks
from .models import SEVERITY_NOTICE, SEVERITY_URGENT, AuditReport, Finding, Notice
from .sink import FlashNoticeSink, MemoryNoticeSink, NoticeSink
from .snapshot import EnvironmentSnapshot, build_snapshot, snapshot_from_request

__all__ = [
    "Auditor",
    "AuditReport",
    "Check",
    "EnvironmentSnapshot",
    "Finding",
    "FlashNoticeSink",
    "MemoryNoticeSink",
    "Notice",
    "NoticeSink",
    "SEVERITY_NOTICE",
    "SEVERITY_URGENT",
    "build_snapshot",
    "default_checks",
    "snapshot_from_request",
]
