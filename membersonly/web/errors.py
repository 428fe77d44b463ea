"""
Members Only Error Pages

Not-found and unexpected errors end up on one generic error page.
"""

import logging

from flask import Flask, render_template
from werkzeug.exceptions import HTTPException

from ..core.errors import MembersOnlyError
from .session import current_user

logger = logging.getLogger(__name__)


def _render_error(message: str, status: int) -> str:
    return render_template(
        "error.html",
        title="Error",
        user=current_user(),
        message=message,
        status=status
    )


def register_error_handlers(app: Flask):
    @app.errorhandler(MembersOnlyError)
    def board_error(e):
        logger.info(f"{type(e).__name__}: {e}")
        return _render_error(str(e), e.status), e.status

    @app.errorhandler(HTTPException)
    def http_error(e):
        # Keep the exception's own headers, e.g. Allow on 405
        response = e.get_response()
        response.set_data(_render_error(e.description or e.name, e.code))
        response.content_type = "text/html; charset=utf-8"
        return response

    @app.errorhandler(500)
    def server_error(e):
        logger.exception("Unhandled error while serving request", exc_info=getattr(e, "original_exception", e))
        return _render_error("Something went wrong.", 500), 500
