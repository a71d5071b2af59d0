import logging

from config_notices.notices.auditor import Auditor
from config_notices.notices.checks import Check, IpAddressCheck, MaintenanceModeCheck, default_checks
from config_notices.notices.models import SEVERITY_NOTICE, SEVERITY_URGENT, Finding, Notice
from config_notices.notices.sink import MemoryNoticeSink
from tests.fakes import FakeCapabilities, FakeFilesystem, make_snapshot


class _ExplodingCheck(Check):
    name = "exploding"

    def evaluate(self, snapshot):
        raise RuntimeError("collaborator unreachable")


class _AlwaysCheck(Check):
    name = "always"

    def __init__(self, message="always fires"):
        self.message = message

    def evaluate(self, snapshot):
        return Finding(Notice(SEVERITY_NOTICE, self.message))


class _BrokenSink(MemoryNoticeSink):
    def configuration(self, notice):
        raise RuntimeError("flash store unavailable")


def test_default_checks_are_registered_in_display_order():
    assert [check.name for check in Auditor().checks] == [
        "mail_config",
        "development_version",
        "live_debug",
        "single_hostname",
        "ip_address",
        "top_level",
        "imaging_library",
        "thumbs_folder",
        "exif_support",
        "mime_detection",
        "imaging_info",
        "maintenance_mode",
    ]


def test_clean_environment_produces_no_notices():
    sink = MemoryNoticeSink()

    report = Auditor().run(make_snapshot(), sink)

    assert report.is_clean
    assert sink.notices == []
    assert sink.errors == []


def test_failing_check_does_not_stop_the_others(caplog):
    auditor = Auditor([_AlwaysCheck("first"), _ExplodingCheck(), _AlwaysCheck("last")])

    with caplog.at_level(logging.WARNING, logger="config_notices.notices.auditor"):
        report = auditor.run(make_snapshot())

    assert [notice.message for notice in report] == ["first", "last"]
    assert "exploding" in caplog.text


def test_broken_sink_does_not_break_the_audit():
    report = Auditor([_AlwaysCheck(), IpAddressCheck()]).run(
        make_snapshot(host="127.0.0.1", route="login"), _BrokenSink()
    )

    assert len(report) == 2
    assert len(report.errors) == 1


def test_notices_reach_the_sink_in_production_order():
    sink = MemoryNoticeSink()
    snapshot = make_snapshot(
        maintenance_mode=True,
        stable_release=False,
        base_path="/cms",
        capabilities=FakeCapabilities(missing=["magic"]),
    )

    report = Auditor().run(snapshot, sink)

    assert sink.notices == list(report.notices)
    assert len(report) == 4
    assert "development version" in report.notices[0].message
    assert "maintenance mode" in report.notices[-1].message


def test_running_twice_yields_identical_reports():
    snapshot = make_snapshot(debug=True, host="localhost", route="login", maintenance_mode=True)
    auditor = Auditor()

    first = auditor.run(snapshot)
    second = auditor.run(snapshot)

    assert first == second
    assert len(first) == 2


def test_escalated_notice_is_written_to_both_channels():
    sink = MemoryNoticeSink()

    report = Auditor([MaintenanceModeCheck(), IpAddressCheck()]).run(
        make_snapshot(host="10.1.2.3", route="userfirst", maintenance_mode=True), sink
    )

    ip_notice = report.notices[1]
    assert sink.errors == [ip_notice.message + " " + ip_notice.info]
    assert report.errors == tuple(sink.errors)


def test_missing_capability_probe_is_treated_as_no_notice():
    report = Auditor().run(make_snapshot(capabilities=None))

    assert report.is_clean


def test_scenario_debug_on_production_host():
    snapshot = make_snapshot(debug=True, host="myapp.example.com", route="dashboard")

    report = Auditor().run(snapshot)

    assert len(report) == 1
    assert report.notices[0].severity == SEVERITY_URGENT
    assert "non-development environment" in report.notices[0].message
    assert report.errors == ()


def test_scenario_ip_host_on_login():
    sink = MemoryNoticeSink()
    snapshot = make_snapshot(host="192.168.1.5", route="login")

    report = Auditor().run(snapshot, sink)

    assert len(sink.notices) == 1
    notice = sink.notices[0]
    assert notice.severity == SEVERITY_NOTICE
    assert "IP address" in notice.message
    assert sink.errors == [f"{notice.message} {notice.info}"]
    assert report.errors == (notice.full_text,)


def test_scenario_maintenance_mode_only():
    filesystem = FakeFilesystem()
    snapshot = make_snapshot(maintenance_mode=True, thumbnails_save_files=False, filesystem=filesystem)

    report = Auditor().run(snapshot)

    assert len(report) == 1
    assert "maintenance mode" in report.notices[0].message
    assert filesystem.calls == []


def test_default_checks_returns_fresh_instances():
    assert default_checks()[0] is not default_checks()[0]
