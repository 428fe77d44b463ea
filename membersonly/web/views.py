"""
Members Only Request Handlers

One view per user-facing action. Each validates input through the
services, consults the session identity, and renders or redirects.
"""

from flask import Blueprint, current_app, redirect, render_template, request, url_for

from ..config import FeaturesConfig
from ..core.board import MembersOnly
from .session import current_user, login_user, logout_user


def _board() -> MembersOnly:
    return current_app.extensions["membersonly"]


def _render(template: str, title: str, **context):
    """Render a view with the title and session user every template expects."""
    context.setdefault("errors", [])
    return render_template(template, title=title, user=current_user(), **context)


def index():
    posts = _board().posts.list_posts()
    return _render("index.html", _board().config.board.name, messages=posts)


def signup():
    if request.method == "GET":
        return _render("signup_form.html", "Sign Up", form={})

    user, result = _board().accounts.register(request.form)
    if user is None:
        return _render("signup_form.html", "Sign Up", form=result.values, errors=result.errors)

    return redirect(url_for("board.login"))


def login():
    if request.method == "GET":
        return _render("login_form.html", "Login")

    user = _board().authenticator.verify(
        request.form.get("username", ""),
        request.form.get("password", "")
    )
    if user is None:
        return redirect(url_for("board.login"))

    login_user(user)
    return redirect(url_for("board.index"))


def logout():
    logout_user()
    return redirect(url_for("board.index"))


def message_create():
    if request.method == "GET":
        return _render("message_form.html", "Create Message", message={})

    user = current_user()
    if user is None:
        return redirect(url_for("board.login"))

    message, result = _board().posts.create_post(user, request.form)
    if message is None:
        return _render("message_form.html", "Create Message", message=result.values, errors=result.errors)

    return redirect(url_for("board.index"))


def membership():
    if request.method == "GET":
        return _render("membership_form.html", "Membership form")

    user = current_user()
    result = _board().accounts.unlock_membership(user.id if user else None, request.form)
    if not result.ok:
        return _render("membership_form.html", "Membership form", errors=result.errors)

    return redirect(url_for("board.index"))


def message_delete(message_id: int):
    user = current_user()
    if user is None:
        return redirect(url_for("board.login"))

    if request.method == "GET":
        post = _board().posts.get_post(message_id)
        return _render("message_delete.html", "Delete message", message=post)

    _board().posts.delete_post(request.form.get("message", type=int), deleted_by=user)
    return redirect(url_for("board.index"))


def create_blueprint(features: FeaturesConfig) -> Blueprint:
    """
    Build the board blueprint.

    Membership and deletion handlers are mounted only when enabled.
    """
    bp = Blueprint("board", __name__)

    bp.add_url_rule("/", view_func=index)
    bp.add_url_rule("/signup", view_func=signup, methods=["GET", "POST"])
    bp.add_url_rule("/login", view_func=login, methods=["GET", "POST"])
    bp.add_url_rule("/logout", view_func=logout)
    bp.add_url_rule("/message/create", view_func=message_create, methods=["GET", "POST"])

    if features.membership_enabled:
        bp.add_url_rule("/membership", view_func=membership, methods=["GET", "POST"])

    if features.delete_enabled:
        bp.add_url_rule(
            "/message/<int:message_id>/delete",
            view_func=message_delete,
            methods=["GET", "POST"]
        )

    return bp
