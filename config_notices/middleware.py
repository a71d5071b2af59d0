import logging

from flask import current_app, request
from flask_login import current_user

from .notices import Auditor, FlashNoticeSink, snapshot_from_request
from .request_gate import RequestGate, RequestMeta, parse_routes

logger = logging.getLogger(__name__)


def register_middleware(app):
    """Register the configuration audit hook with the Flask app."""

    gate = RequestGate(parse_routes(app.config.get("CONFIG_NOTICES_ROUTES")))
    auditor = Auditor()
    app.extensions["config_notices"] = {"gate": gate, "auditor": auditor}

    @app.before_request
    def configuration_notices_checkpoint():
        """
        Run the configuration audit on the few backend pages that show it.

        The audit only ever adds flash messages; it never blocks or alters the
        response, and a failure inside it is logged and swallowed.
        """
        if not current_app.config.get("CONFIG_NOTICES_ENABLED", True):
            return None

        try:
            meta = RequestMeta.from_request(request)
            if not gate.should_run(meta):
                return None

            snapshot = snapshot_from_request(current_app, request, current_user)
            auditor.run(snapshot, FlashNoticeSink())
        except Exception as e:
            logger.warning(f"Configuration audit failed, continuing request: {e}")

        return None
