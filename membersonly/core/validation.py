"""
Members Only Form Validation

Each form has one validation function. It trims the submitted fields,
checks them, and returns a ValidationResult holding the sanitized values
(for re-rendering the form) and any field errors.
"""

import hmac
import re
from dataclasses import dataclass, field
from typing import Mapping

from markupsafe import escape

ALPHA_RE = re.compile(r"^[A-Za-z]+$")
ALPHANUMERIC_RE = re.compile(r"^[A-Za-z0-9]+$")

SIGNUP_FIELDS = ("firstname", "lastname", "username", "password", "confirmpassword")
MESSAGE_FIELDS = ("title", "message")
MEMBERSHIP_FIELDS = ("password",)


@dataclass(frozen=True)
class FieldError:
    """A message tied to one form field."""
    field: str
    message: str


@dataclass
class ValidationResult:
    """Sanitized form values plus the errors found in them."""
    values: dict[str, str] = field(default_factory=dict)
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str):
        self.errors.append(FieldError(field_name, message))

    def errors_for(self, field_name: str) -> list[str]:
        return [e.message for e in self.errors if e.field == field_name]


def _trimmed(form: Mapping[str, str], fields: tuple[str, ...]) -> dict[str, str]:
    return {name: (form.get(name) or "").strip() for name in fields}


def validate_signup(form: Mapping[str, str], min_password_length: int = 6) -> ValidationResult:
    """Validate the signup form. Every failing field is reported."""
    result = ValidationResult(values=_trimmed(form, SIGNUP_FIELDS))
    values = result.values

    if not ALPHA_RE.match(values["firstname"]):
        result.add("firstname", "Invalid first name")

    if not ALPHA_RE.match(values["lastname"]):
        result.add("lastname", "Invalid last name")

    if not ALPHANUMERIC_RE.match(values["username"]):
        result.add("username", "Invalid username")

    if len(values["password"]) < min_password_length:
        result.add("password", "Invalid password")

    if values["confirmpassword"] != values["password"]:
        result.add("confirmpassword", "Password confirmation does not match password")

    return result


def validate_message(form: Mapping[str, str]) -> ValidationResult:
    """
    Validate the message form.

    Title and message must be non-empty after trimming. All values are
    HTML-escaped once validated, so stored messages are safe to render as-is.
    """
    values = _trimmed(form, MESSAGE_FIELDS)
    result = ValidationResult()

    if not values["title"]:
        result.add("title", "Invalid title")

    if not values["message"]:
        result.add("message", "Invalid message")

    result.values = {name: str(escape(value)) for name, value in values.items()}
    return result


def validate_membership(form: Mapping[str, str], member_secret: str) -> ValidationResult:
    """Check the submitted password against the shared membership secret."""
    result = ValidationResult(values=_trimmed(form, MEMBERSHIP_FIELDS))

    submitted = result.values["password"].encode("utf-8")
    if not member_secret or not hmac.compare_digest(submitted, member_secret.encode("utf-8")):
        result.add("password", "Sorry, password is incorrect.")

    return result
