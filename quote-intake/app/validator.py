"""Submit-time validation for the Quote Intake tool.

Only visible fields are checked. Every failing field gets one message, and
all messages are computed in a single pass so the form can show them
together.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any

from app.form_state import visible_fields
from app.schema import (
    DATE,
    MULTI_CHOICE,
    SINGLE_CHOICE,
    TEXT_KINDS,
    Branch,
    FieldDefinition,
    localize,
)
from app.translations import t


def _is_calendar_date(value: str) -> bool:
    """True for an ISO ``YYYY-MM-DD`` string naming a real calendar day."""
    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _required_message(field_def: FieldDefinition, locale: str) -> str:
    return localize(field_def.required_message, locale) or t("required", locale)


def validate_field(field_def: FieldDefinition, value: Any, locale: str = "en") -> str | None:
    """Return the error message for one visible field, or None if it passes."""
    kind = field_def.kind

    if kind in TEXT_KINDS:
        text = "" if value is None else str(value).strip()
        if not text:
            return _required_message(field_def, locale) if field_def.required else None
        pattern = field_def.validation_rules.get("pattern")
        if pattern and not re.match(pattern, text):
            return t("invalid_format", locale)
        return None

    if kind == DATE:
        text = "" if value is None else str(value).strip()
        if not text:
            return _required_message(field_def, locale) if field_def.required else None
        if not _is_calendar_date(text):
            return t("invalid_date", locale)
        return None

    if kind == SINGLE_CHOICE:
        if value is None or value == "":
            return _required_message(field_def, locale) if field_def.required else None
        if value not in field_def.option_values:
            return t("invalid_choice", locale)
        return None

    if kind == MULTI_CHOICE:
        if value is None:
            selected = []
        elif isinstance(value, str):
            selected = [value] if value else []
        else:
            selected = list(value)
        if not selected:
            return _required_message(field_def, locale) if field_def.required else None
        if any(v not in field_def.option_values for v in selected):
            return t("invalid_choice", locale)
        return None

    # Kinds are checked when the catalog loads
    raise AssertionError(f"unhandled field kind {kind!r}")


def validate(branch: Branch, answers: dict[str, Any], locale: str = "en") -> dict[str, str]:
    """Validate *answers* against the visible fields of *branch*.

    Returns a field key -> message map; empty means the answers are
    acceptable. Hidden fields never produce errors.
    """
    errors: dict[str, str] = {}
    for field_def in visible_fields(branch, answers):
        message = validate_field(field_def, answers.get(field_def.key), locale)
        if message:
            errors[field_def.key] = message
    return errors


_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_contact(contact, locale: str = "en") -> dict[str, str]:
    """Check the contact block sent alongside a submission.

    *contact* is any object with first_name, last_name, email and
    agree_to_terms attributes (ContactDetails or the API model). Keys in
    the result use the wire names so they merge with field errors.
    """
    errors: dict[str, str] = {}
    if not contact.first_name.strip():
        errors["firstName"] = t("required", locale)
    if not contact.last_name.strip():
        errors["lastName"] = t("required", locale)
    email = contact.email.strip()
    if not email:
        errors["email"] = t("required", locale)
    elif not _EMAIL_RE.match(email):
        errors["email"] = t("invalid_email", locale)
    if not contact.agree_to_terms:
        errors["agreeToTerms"] = t("terms_required", locale)
    return errors
