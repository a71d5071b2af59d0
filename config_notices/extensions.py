from __future__ import annotations

from flask_login import LoginManager

__all__ = ["login_manager"]

login_manager = LoginManager()
