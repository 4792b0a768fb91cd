"""Intake session lifecycle for the Quote Intake tool.

One IntakeSession per client working through the quote form:

    selecting -> answering -> submitting -> handed_off
                     ^            |
                     +------------+  (validation or submission failed)

plus ``cancelled`` from any non-terminal state. The session never does I/O
itself; the optional ``submit_fn`` collaborator receives the compiled
payload and is responsible for delivering it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from app.branch_selector import BranchCatalog
from app.errors import InvalidTransition, SubmissionError, ValidationError
from app.form_state import FormController
from app.schema import Branch, FieldDefinition, FormState, HandOff, SubmissionPayload, localize
from app.submission import compile_submission
from app.translations import normalize_locale
from app.validator import validate

logger = logging.getLogger(__name__)

SELECTING = "selecting"
ANSWERING = "answering"
SUBMITTING = "submitting"
HANDED_OFF = "handed_off"
CANCELLED = "cancelled"

TERMINAL_STATES = (HANDED_OFF, CANCELLED)


class IntakeSession:
    """State machine wrapping a FormController for one client."""

    def __init__(
        self,
        catalog: BranchCatalog,
        locale: str = "en",
        submit_fn: Callable[[SubmissionPayload], Any] | None = None,
        classification: str | None = None,
    ):
        self.catalog = catalog
        self.locale = normalize_locale(locale)
        self.submit_fn = submit_fn
        self.status = SELECTING
        self.request_number: str | None = None
        self._controller: FormController | None = FormController(catalog)
        if classification is not None:
            self.select_branch(classification)

    # -- helpers ------------------------------------------------------------

    def _require(self, *allowed: str) -> FormController:
        if self.status not in allowed or self._controller is None:
            raise InvalidTransition(f"Not allowed while session is {self.status}")
        return self._controller

    @property
    def branch(self) -> Branch | None:
        return self._controller.branch if self._controller else None

    @property
    def state(self) -> FormState | None:
        return self._controller.state if self._controller else None

    # -- transitions --------------------------------------------------------

    def select_branch(self, classification: str | None) -> Branch:
        """Pick (or switch) the branch. Answers and errors start empty."""
        controller = self._require(SELECTING, ANSWERING)
        branch = controller.select_branch(classification)
        self.status = ANSWERING
        return branch

    def set_answer(self, key: str, value: Any) -> list[str]:
        return self._require(ANSWERING).set_answer(key, value)

    def set_answers(self, values: dict[str, Any]) -> list[str]:
        return self._require(ANSWERING).set_answers(values)

    def get_visible_fields(self) -> list[FieldDefinition]:
        return self._require(ANSWERING, SUBMITTING).get_visible_fields()

    def visible_field_keys(self) -> list[str]:
        return [f.key for f in self.get_visible_fields()]

    def validate(self) -> dict[str, str]:
        """Validate current answers and record the errors on the state."""
        controller = self._require(ANSWERING, SUBMITTING)
        errors = validate(controller.branch, controller.state.answers, self.locale)
        controller.state.errors = errors
        return errors

    def compile(self) -> SubmissionPayload:
        """Compile the visible answers; the request number is kept for retries."""
        controller = self._require(ANSWERING, SUBMITTING)
        payload = compile_submission(
            controller.branch.id,
            controller.state.answers,
            controller.visible_field_keys(),
            generator=self.catalog.request_number_generator,
            request_number=self.request_number,
            case_type_label=localize(controller.branch.label, self.locale),
            locale=self.locale,
        )
        self.request_number = payload.request_number
        return payload

    def submit(self) -> HandOff:
        """Validate, compile and hand the payload to ``submit_fn``.

        Raises ValidationError (session back in ``answering``) when visible
        fields fail. Any error from ``submit_fn`` is re-raised after returning
        to ``answering``, so the caller may retry with the same request number.
        """
        self._require(ANSWERING)
        self.status = SUBMITTING

        errors = self.validate()
        if errors:
            self.status = ANSWERING
            logger.debug("Submit rejected for %s: %s", self.branch.id, sorted(errors))
            raise ValidationError(errors)

        payload = self.compile()
        response = None
        if self.submit_fn is not None:
            try:
                response = self.submit_fn(payload)
            except SubmissionError:
                self.status = ANSWERING
                logger.warning("Submission of %s failed; session returned to answering",
                               payload.request_number)
                raise
            except Exception:
                self.status = ANSWERING
                logger.exception("Unexpected error submitting %s", payload.request_number)
                raise

        self.status = HANDED_OFF
        self._controller = None
        logger.debug("Handed off %s (%s)", payload.request_number, payload.branch_id)
        return HandOff(payload=payload, response=response)

    def cancel(self) -> None:
        """Abandon the session; its form state is discarded."""
        if self.status in TERMINAL_STATES:
            raise InvalidTransition(f"Session already {self.status}")
        self.status = CANCELLED
        self._controller = None
