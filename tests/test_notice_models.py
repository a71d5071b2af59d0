import json
from dataclasses import FrozenInstanceError

import pytest

from config_notices.notices.models import (
    SEVERITY_NOTICE,
    SEVERITY_URGENT,
    AuditReport,
    Finding,
    Notice,
)


def test_payload_omits_info_when_absent():
    notice = Notice(SEVERITY_NOTICE, "Mail is <strong>not</strong> configured.")

    assert notice.to_payload() == {"severity": 1, "notice": "Mail is <strong>not</strong> configured."}
    assert json.loads(notice.to_json()) == notice.to_payload()


def test_payload_includes_info():
    notice = Notice(SEVERITY_URGENT, "Debug is on.", "Add a dev domain.")

    assert notice.to_payload() == {"severity": 2, "notice": "Debug is on.", "info": "Add a dev domain."}


def test_json_round_trip_restores_equal_notice():
    notice = Notice(SEVERITY_URGENT, "Debug is on.", "Add a dev domain.")

    assert Notice.from_json(notice.to_json()) == notice


def test_full_text_joins_message_and_info():
    assert Notice(1, "Message.", "Info.").full_text == "Message. Info."
    assert Notice(1, "Message.").full_text == "Message."


def test_severity_is_an_open_enum():
    assert Notice(3, "Something new").severity == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"severity": 0, "message": "x"},
        {"severity": -1, "message": "x"},
        {"severity": True, "message": "x"},
        {"severity": "1", "message": "x"},
        {"severity": 1, "message": ""},
        {"severity": 1, "message": "   "},
        {"severity": 1, "message": "x", "info": 42},
    ],
)
def test_invalid_notices_are_rejected(kwargs):
    with pytest.raises(ValueError):
        Notice(**kwargs)


def test_notice_is_immutable():
    notice = Notice(1, "x")

    with pytest.raises(FrozenInstanceError):
        notice.severity = 2


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '{"severity": 1}'])
def test_from_json_rejects_malformed_payloads(raw):
    with pytest.raises(ValueError):
        Notice.from_json(raw)


def test_audit_report_iterates_notices():
    first = Notice(1, "first")
    second = Notice(2, "second")
    report = AuditReport(notices=(first, second), errors=("boom",))

    assert list(report) == [first, second]
    assert len(report) == 2
    assert not report.is_clean
    assert AuditReport().is_clean


def test_finding_defaults_to_no_escalation():
    assert Finding(Notice(1, "x")).escalate is False
