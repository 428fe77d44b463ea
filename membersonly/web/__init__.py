"""Members Only Web Module - Flask application factory."""

import logging

from flask import Flask

from ..core.board import MembersOnly
from ..utils.formatting import format_author, format_timestamp
from .errors import register_error_handlers
from .session import load_session_user
from .views import create_blueprint

logger = logging.getLogger(__name__)


def create_app(board: MembersOnly) -> Flask:
    """
    Build the Flask app around a set-up board.

    Args:
        board: MembersOnly instance whose setup() has already run
    """
    app = Flask(__name__)
    app.config["SECRET_KEY"] = board.config.web.secret_key
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"

    app.extensions["membersonly"] = board

    app.before_request(load_session_user)
    app.register_blueprint(create_blueprint(board.config.features))
    register_error_handlers(app)

    app.jinja_env.filters["timestamp"] = format_timestamp
    app.jinja_env.globals["format_author"] = format_author
    app.jinja_env.globals["features"] = board.config.features

    logger.info(f"Web app created for {board.config.board.name}")
    return app


__all__ = ["create_app"]
