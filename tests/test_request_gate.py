import pytest

from config_notices.request_gate import (
    AUDITED_ROUTES,
    SUB_REQUEST_ENVIRON_KEY,
    RequestGate,
    RequestMeta,
    parse_routes,
)


@pytest.mark.parametrize("route", ["dashboard", "login", "userfirst"])
def test_gate_runs_on_allow_listed_master_requests(route):
    assert RequestGate().should_run(RequestMeta(route=route, host="example.com"))


@pytest.mark.parametrize("route", ["health", "logout", "dashboard.extra", None, ""])
def test_gate_skips_other_routes(route):
    assert not RequestGate().should_run(RequestMeta(route=route, host="example.com"))


def test_gate_skips_sub_requests():
    meta = RequestMeta(route="dashboard", host="example.com", is_master_request=False)

    assert not RequestGate().should_run(meta)


def test_gate_honors_custom_routes():
    gate = RequestGate(["settings"])

    assert gate.should_run(RequestMeta(route="settings", host="example.com"))
    assert not gate.should_run(RequestMeta(route="dashboard", host="example.com"))


@pytest.mark.parametrize(
    "route, expected",
    [("login", True), ("userfirst", True), ("dashboard", False), (None, False)],
)
def test_escalation_only_on_authentication_routes(route, expected):
    assert RequestGate.escalates(route) is expected


def test_parse_routes_accepts_strings_and_iterables():
    assert parse_routes("dashboard, login ;userfirst") == ("dashboard", "login", "userfirst")
    assert parse_routes(["a", " ", "b"]) == ("a", "b")
    assert parse_routes(None) == AUDITED_ROUTES
    assert parse_routes("") == AUDITED_ROUTES


def test_request_meta_from_flask_request(app):
    with app.test_request_context("/dashboard", base_url="http://example.org/cms"):
        from flask import request

        meta = RequestMeta.from_request(request)

    assert meta == RequestMeta(route="dashboard", host="example.org", base_path="/cms", is_master_request=True)


def test_request_meta_detects_sub_request_marker(app):
    with app.test_request_context("/dashboard", environ_overrides={SUB_REQUEST_ENVIRON_KEY: True}):
        from flask import request

        meta = RequestMeta.from_request(request)

    assert meta.is_master_request is False
