"""
Pytest configuration and shared fixtures for the configuration-notices tests.
"""
import pytest

from config_notices import create_app
from config_notices.utils.capabilities import RuntimeCapabilities
from tests.fakes import ADMIN_USER_ID, EDITOR_USER_ID


def _base_config(web_root):
    return {
        'TESTING': True,
        'DEBUG': False,
        'SECRET_KEY': 'test-secret-key',
        'SETTINGS_FILE': None,
        'WEB_ROOT': str(web_root),
        'APP_VERSION': '1.0.0',
        'SITE_SETTINGS': {
            'general': {
                'mailoptions': {'transport': 'smtp', 'host': 'localhost'},
                'thumbnails': {'save_files': False},
                'maintenance_mode': False,
            },
        },
        'USERS': {
            ADMIN_USER_ID: {'permissions': ['files:config', 'dashboard']},
            EDITOR_USER_ID: {'permissions': ['dashboard']},
        },
    }


@pytest.fixture
def make_app(tmp_path):
    """Factory for app instances; keyword overrides are merged into the config."""

    def _make(**overrides):
        config = _base_config(tmp_path)
        site_settings = overrides.pop('SITE_SETTINGS', None)
        config.update(overrides)
        if site_settings is not None:
            config['SITE_SETTINGS'] = site_settings
        return create_app(config)

    return _make


@pytest.fixture
def app(make_app):
    """Create and configure a new app instance for each test."""
    return make_app()


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """A test runner for the app's Click commands."""
    return app.test_cli_runner()


@pytest.fixture
def all_capabilities(monkeypatch):
    """Pretend every optional imaging/MIME library is installed."""
    monkeypatch.setattr(RuntimeCapabilities, "module_available", lambda self, module: True)
    monkeypatch.setattr(RuntimeCapabilities, "function_exists", lambda self, module, name: True)
    monkeypatch.setattr(RuntimeCapabilities, "class_exists", lambda self, module, name: True)
