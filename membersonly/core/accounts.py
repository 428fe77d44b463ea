"""
Members Only Account Service

Signup and membership unlock.
"""

import logging
from typing import Optional, Mapping, TYPE_CHECKING

from ..db.models import User
from ..db.users import UserRepository
from .errors import NotFoundError
from .validation import ValidationResult, validate_signup, validate_membership

if TYPE_CHECKING:
    from .board import MembersOnly

logger = logging.getLogger(__name__)


class AccountService:
    """
    Account management for Members Only.

    Signup creates a non-member account; membership is unlocked later
    with the board's shared secret.
    """

    def __init__(self, board: "MembersOnly"):
        self.board = board
        self.crypto = board.crypto
        self.config = board.config
        self.user_repo = UserRepository(board.db)

    def register(self, form: Mapping[str, str]) -> tuple[Optional[User], ValidationResult]:
        """
        Create an account from a submitted signup form.

        Returns:
            (User, result) on success
            (None, result) with field errors on failure; nothing is written
        """
        result = validate_signup(form, self.config.board.min_password_length)
        if not result.ok:
            return None, result

        values = result.values
        password_hash = self.crypto.hash_password(values["password"])

        if self.user_repo.get_user_by_username(values["username"]):
            result.add("username", "Username already in use.")
            return None, result

        user = self.user_repo.create_user(
            username=values["username"],
            first_name=values["firstname"],
            last_name=values["lastname"],
            password_hash=password_hash,
            membership_status=False
        )

        logger.info(f"User registered: {user.username} (id={user.id})")
        return user, result

    def unlock_membership(self, user_id: Optional[int], form: Mapping[str, str]) -> ValidationResult:
        """
        Grant membership when the submitted password matches the shared secret.

        Raises:
            NotFoundError: secret matched but the user record is missing
        """
        result = validate_membership(form, self.config.board.member_secret)
        if not result.ok:
            logger.info(f"Membership refused for user id={user_id}: wrong secret")
            return result

        user = self.user_repo.get_user_by_id(user_id) if user_id is not None else None
        if not user:
            raise NotFoundError("User not found")

        user.membership_status = True
        self.user_repo.update_user(user)

        logger.info(f"Membership unlocked: {user.username}")
        return result
