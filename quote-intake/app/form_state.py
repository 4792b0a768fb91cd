"""Form state controller for the Quote Intake tool.

Holds the answers for the active branch and keeps them consistent with
field visibility. Visibility is computed in a single pass in declaration
order: a field's ``visible_when`` may only look at earlier fields, and
those have already been settled by the time it is evaluated.
"""

from __future__ import annotations

import logging
from typing import Any

from app.branch_selector import BranchCatalog
from app.schema import MULTI_CHOICE, Branch, FieldDefinition, FormState

logger = logging.getLogger(__name__)


def visible_fields(branch: Branch, answers: dict[str, Any]) -> list[FieldDefinition]:
    """Return the fields of *branch* visible under *answers*, in order.

    Answers of hidden fields are ignored while evaluating later conditions,
    so a field hidden upstream cannot keep its dependents visible.
    """
    settled: dict[str, Any] = {}
    result: list[FieldDefinition] = []
    for field_def in branch.fields:
        cond = field_def.visible_when
        if cond is None or cond.evaluate(settled):
            result.append(field_def)
            if field_def.key in answers:
                settled[field_def.key] = answers[field_def.key]
    return result


def prune_hidden(branch: Branch, answers: dict[str, Any]) -> list[str]:
    """Remove answers of hidden fields from *answers* in place.

    Returns the removed keys in declaration order.
    """
    keep = {f.key for f in visible_fields(branch, answers)}
    removed = [key for key in branch.field_keys() if key in answers and key not in keep]
    for key in removed:
        del answers[key]
    return removed


def coerce_answer(field_def: FieldDefinition, value: Any) -> Any:
    """Normalize a raw answer for *field_def*; ``None`` means "no answer".

    Multi-choice answers become a list of strings; everything else a string.
    Empty strings and empty selections count as no answer.
    """
    if value is None:
        return None
    if field_def.kind == MULTI_CHOICE:
        if isinstance(value, str):
            items = [value] if value else []
        else:
            items = [str(v) for v in value]
        return items or None
    text = str(value)
    return text if text != "" else None


class FormController:
    """Answers and visibility for one branch at a time."""

    def __init__(self, catalog: BranchCatalog, classification: str | None = None):
        self.catalog = catalog
        self.branch: Branch | None = None
        self.state: FormState | None = None
        if classification is not None:
            self.select_branch(classification)

    def select_branch(self, classification: str | None) -> Branch:
        """Switch to the branch for *classification*; answers and errors reset."""
        branch = self.catalog.select(classification)
        self.branch = branch
        self.state = FormState(branch_id=branch.id)
        logger.debug("Selected branch %s for %r", branch.id, classification)
        return branch

    def _require_branch(self) -> Branch:
        if self.branch is None or self.state is None:
            raise RuntimeError("No branch selected")
        return self.branch

    @property
    def answers(self) -> dict[str, Any]:
        self._require_branch()
        return self.state.answers

    @property
    def errors(self) -> dict[str, str]:
        self._require_branch()
        return self.state.errors

    def _field(self, key: str) -> FieldDefinition:
        branch = self._require_branch()
        field_def = branch.get_field(key)
        if field_def is None:
            raise KeyError(f"Unknown field '{key}' for branch '{branch.id}'")
        return field_def

    def _apply(self, answers: dict[str, Any], key: str, value: Any) -> list[str]:
        """Apply one answer to *answers* and prune; returns the keys pruned."""
        branch = self.branch
        field_def = self._field(key)
        coerced = coerce_answer(field_def, value)
        if key not in {f.key for f in visible_fields(branch, answers)}:
            if coerced is None:
                # Clearing a hidden field is what pruning already did
                return []
            raise ValueError(f"Field '{key}' is not visible in branch '{branch.id}'")

        if coerced is None:
            answers.pop(key, None)
        else:
            answers[key] = coerced
        return prune_hidden(branch, answers)

    def _commit(self, staged: dict[str, Any]) -> None:
        self.state.answers.clear()
        self.state.answers.update(staged)

    def set_answer(self, key: str, value: Any) -> list[str]:
        """Store (or clear) one answer, then prune newly hidden fields.

        Raises KeyError for a key outside the branch and ValueError for a
        non-empty answer to a field that is currently hidden. Returns the
        keys pruned.
        """
        self._require_branch()
        staged = dict(self.state.answers)
        removed = self._apply(staged, key, value)
        self._commit(staged)
        if removed:
            logger.debug("Cleared hidden answers %s after %s changed", removed, key)
        return removed

    def set_answers(self, values: dict[str, Any]) -> list[str]:
        """Apply several answers in branch declaration order, all or nothing.

        Triggers are set before the fields they reveal, so a dependent
        answer can arrive in the same batch as its trigger. If any answer
        is rejected the stored answers are left untouched.
        """
        branch = self._require_branch()
        unknown = [k for k in values if branch.get_field(k) is None]
        if unknown:
            raise KeyError(f"Unknown field(s) {unknown} for branch '{branch.id}'")

        staged = dict(self.state.answers)
        removed: list[str] = []
        for key in branch.field_keys():
            if key in values:
                removed.extend(self._apply(staged, key, values[key]))
        self._commit(staged)
        if removed:
            logger.debug("Cleared hidden answers %s", removed)
        return removed

    def clear_answer(self, key: str) -> list[str]:
        return self.set_answer(key, None)

    def get_visible_fields(self) -> list[FieldDefinition]:
        """Currently visible fields, in declaration order."""
        return visible_fields(self._require_branch(), self.state.answers)

    def visible_field_keys(self) -> list[str]:
        return [f.key for f in self.get_visible_fields()]
