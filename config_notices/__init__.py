import logging
from typing import Any

from flask import Flask, render_template

from .authz import configure_login_manager
from .config import ENV_DIAGNOSTICS
from .logging_config import configure_logging
from .middleware import register_middleware
from .version import __version__

logger = logging.getLogger(__name__)


def create_app(config: dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__, static_folder="static", static_url_path="/static")

    _load_base_config(app, config)

    configure_login_manager(app)
    register_middleware(app)

    from .template_context import register_template_context

    register_template_context(app)
    _add_core_routes(app)
    configure_logging(app)

    from .management import register_commands

    register_commands(app)

    return app


def _load_base_config(app: Flask, config: dict[str, Any] | None) -> None:
    app.config.from_object("config_notices.config.Config")
    if config:
        app.config.update(config)
    app.config["ENV_DIAGNOSTICS"] = ENV_DIAGNOSTICS
    for warning in ENV_DIAGNOSTICS.get("warnings", ()):
        logger.warning("Environment configuration warning: %s", warning)
    app.config.setdefault("APP_VERSION", __version__)


def _add_core_routes(app):
    """Backend pages the configuration audit runs on"""

    @app.route("/dashboard", endpoint="dashboard")
    def dashboard():
        return render_template("backend.html", title="Dashboard")

    @app.route("/login", endpoint="login", methods=["GET", "POST"])
    def login():
        return render_template("backend.html", title="Login")

    @app.route("/userfirst", endpoint="userfirst", methods=["GET", "POST"])
    def userfirst():
        """First-user setup"""
        return render_template("backend.html", title="Create the first user")

    @app.route("/health")
    def health():
        return {"status": "ok"}


__all__ = ["create_app", "__version__"]
