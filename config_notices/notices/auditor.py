from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from .checks import Check, default_checks
from .models import AuditReport, Notice
from .sink import NoticeSink
from .snapshot import EnvironmentSnapshot

logger = logging.getLogger(__name__)


class Auditor:
    """Runs every registered check against one snapshot.

    The auditor holds nothing but its check list. A check that raises is
    logged and counted as "no notice"; the remaining checks still run.
    """

    def __init__(self, checks: Optional[Iterable[Check]] = None):
        self.checks: Tuple[Check, ...] = tuple(checks) if checks is not None else default_checks()

    def run(self, snapshot: EnvironmentSnapshot, sink: Optional[NoticeSink] = None) -> AuditReport:
        notices: List[Notice] = []
        errors: List[str] = []

        for check in self.checks:
            try:
                finding = check.evaluate(snapshot)
            except Exception as exc:
                logger.warning("Configuration check %s failed to evaluate: %s", check.name, exc, exc_info=True)
                continue
            if finding is None:
                continue

            notices.append(finding.notice)
            logger.debug("Configuration check %s raised a severity %s notice", check.name, finding.notice.severity)
            if sink is not None:
                self._emit(sink.configuration, finding.notice, check)

            if finding.escalate:
                message = finding.notice.full_text
                errors.append(message)
                if sink is not None:
                    self._emit(sink.error, message, check)

        if notices:
            logger.info(
                "Configuration audit for route=%s host=%s produced %d notice(s), %d error(s)",
                snapshot.route,
                snapshot.host,
                len(notices),
                len(errors),
            )
        return AuditReport(notices=tuple(notices), errors=tuple(errors))

    @staticmethod
    def _emit(write, payload, check: Check) -> None:
        try:
            write(payload)
        except Exception as exc:
            logger.warning("Could not record notice from %s: %s", check.name, exc)


__all__ = ["Auditor"]
