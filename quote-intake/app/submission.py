"""Submission compiler for the Quote Intake tool.

Turns accepted answers into the canonical SubmissionPayload. Nothing here
touches the network or disk; posting the payload is the job of
app.submission_client (or whatever ``submit_fn`` the caller injects).
"""

from __future__ import annotations

import random
import re
from collections.abc import Callable, Iterable
from typing import Any

from app.schema import (
    DATE,
    MULTI_CHOICE,
    SINGLE_CHOICE,
    Branch,
    SubmissionPayload,
    localize,
)

REQUEST_NUMBER_PREFIX = "lr-"
REQUEST_NUMBER_MIN = 100000
REQUEST_NUMBER_MAX = 999999


def generate_request_number(rng: random.Random | None = None) -> str:
    """Return a tracking number like ``lr-482913``.

    Uniqueness is best-effort over the six-digit space; the server is
    authoritative and rejects collisions.
    """
    source = rng or random
    return f"{REQUEST_NUMBER_PREFIX}{source.randint(REQUEST_NUMBER_MIN, REQUEST_NUMBER_MAX):06d}"


class RequestNumberGenerator:
    """Request-number source that never repeats a number it has issued.

    Collisions with numbers issued by other processes are still possible;
    the server remains authoritative.
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng
        self.issued: set[str] = set()

    def __call__(self) -> str:
        if len(self.issued) > REQUEST_NUMBER_MAX - REQUEST_NUMBER_MIN:
            raise RuntimeError("Request number space exhausted")
        number = generate_request_number(self.rng)
        while number in self.issued:
            number = generate_request_number(self.rng)
        self.issued.add(number)
        return number


_REQUEST_NUMBER_RE = re.compile(r"lr-\d{6}")


def normalize_request_number(value: str) -> str:
    """Clean up a typed request number: ``LR 482913`` -> ``lr-482913``."""
    cleaned = re.sub(r"[^a-zA-Z0-9]", "", value or "").lower()
    if cleaned.startswith("lr"):
        cleaned = cleaned[2:]
    return f"{REQUEST_NUMBER_PREFIX}{cleaned}" if cleaned else ""


def is_request_number(value: str) -> bool:
    return bool(_REQUEST_NUMBER_RE.fullmatch(value or ""))


def compile_submission(
    branch_id: str,
    answers: dict[str, Any],
    visible_field_keys: Iterable[str],
    *,
    generator: Callable[[], str] = generate_request_number,
    request_number: str | None = None,
    case_type_label: str = "",
    locale: str = "en",
) -> SubmissionPayload:
    """Build the payload from answers restricted to *visible_field_keys*.

    Answers for keys outside the visible set are dropped here even if the
    caller failed to prune them. ``request_number`` lets a retry reuse the
    number generated for the first attempt.
    """
    visible = set(visible_field_keys)
    filtered = {
        key: list(value) if isinstance(value, list) else value
        for key, value in answers.items()
        if key in visible
    }
    return SubmissionPayload(
        request_number=request_number or generator(),
        branch_id=branch_id,
        answers=filtered,
        case_type_label=case_type_label,
        locale=locale,
    )


def describe_answers(branch: Branch, answers: dict[str, Any], locale: str = "en") -> str:
    """Render answers as question/answer pairs in branch order.

    Used as the free-text case description attorneys read on the request.
    Choice values are shown by their option label.
    """
    lines: list[str] = []
    for field_def in branch.fields:
        if field_def.key not in answers:
            continue
        value = answers[field_def.key]
        if field_def.kind == SINGLE_CHOICE:
            shown = field_def.option_label(value, locale)
        elif field_def.kind == MULTI_CHOICE:
            shown = ", ".join(field_def.option_label(v, locale) for v in value)
        elif field_def.kind == DATE:
            shown = str(value)
        else:
            shown = str(value).strip()
        question = localize(field_def.label, locale) or field_def.key
        lines.append(f"{question}\n{shown}")
    return "\n\n".join(lines)
