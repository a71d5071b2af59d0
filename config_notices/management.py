"""
Management commands for running the configuration audit from a shell
"""
import re
import sys

import click
from flask import current_app
from flask.cli import with_appcontext

from .notices import Auditor, MemoryNoticeSink, build_snapshot
from .notices.snapshot import app_collaborators
from .request_gate import RequestMeta

_TAGS = re.compile(r"<[^>]+>")


class _CliAuth:
    def __init__(self, manage_config: bool):
        self.manage_config = manage_config

    def is_authenticated(self) -> bool:
        return self.manage_config

    def is_allowed(self, permission: str) -> bool:
        return self.manage_config


def _plain(text):
    return _TAGS.sub("", text or "")


@click.group('config-notices')
def config_notices_cli():
    """Configuration sanity checks"""


@config_notices_cli.command('audit')
@click.option('--host', default='localhost', show_default=True, help='Host name to audit as.')
@click.option('--route', default='dashboard', show_default=True, help='Route name to audit as.')
@click.option('--base-path', default='', help='Subfolder the app is mounted under.')
@click.option('--debug', type=click.BOOL, default=None, help='Override the app debug flag (true/false).')
@click.option('--as-admin', is_flag=True, help='Audit as a user allowed to manage configuration.')
@with_appcontext
def audit_command(host, route, base_path, debug, as_admin):
    """Run every configuration check once and print the notices"""
    app = current_app
    snapshot = build_snapshot(
        RequestMeta(route=route, host=host, base_path=base_path),
        debug=app.debug if debug is None else debug,
        auth=_CliAuth(as_admin),
        **app_collaborators(app),
    )
    sink = MemoryNoticeSink()
    report = Auditor().run(snapshot, sink)

    if report.is_clean:
        click.echo("✅ No configuration notices.")
        return

    for notice in sink.notices:
        click.echo(f"⚠️  [severity {notice.severity}] {_plain(notice.message)}")
        if notice.info:
            click.echo(f"    {_plain(notice.info)}")
    for message in sink.errors:
        click.echo(f"❌ {_plain(message)}")
    click.echo(f"{len(sink.notices)} notice(s), {len(sink.errors)} error(s).")
    sys.exit(1)


def register_commands(app):
    """Register CLI commands"""
    app.cli.add_command(config_notices_cli)
