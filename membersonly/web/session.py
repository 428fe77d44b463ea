"""
Members Only Session Identity

The logged-in user's ID lives in Flask's signed session cookie and is
resolved to a User once per request, before any handler runs.
"""

import logging
from typing import Optional

from flask import current_app, g, session

from ..db.models import User
from ..db.users import UserRepository

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


def load_session_user():
    """Resolve the session's user ID into g.user (None when absent or stale)."""
    g.user = None

    user_id = session.get(SESSION_USER_KEY)
    if user_id is None:
        return

    board = current_app.extensions["membersonly"]
    user = UserRepository(board.db).get_user_by_id(user_id)
    if user is None:
        logger.info(f"Dropping session for missing user id={user_id}")
        session.pop(SESSION_USER_KEY, None)
        return

    g.user = user


def current_user() -> Optional[User]:
    """The authenticated user for this request, or None."""
    return g.get("user")


def login_user(user: User):
    """Bind the session to a user."""
    session.clear()
    session[SESSION_USER_KEY] = user.id
    g.user = user


def logout_user():
    """Forget the session's identity. Safe to call when nobody is logged in."""
    session.clear()
    g.user = None
