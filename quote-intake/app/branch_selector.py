"""Branch catalog and selection for the Quote Intake tool.

A BranchCatalog checks every branch when it is built, so a broken flow
fails at load time rather than when a client submits. Selection maps a
classification value (case type, or inside/outside the U.S.) to a branch,
falling back to the configured default branch.

Part of the LinkToLawyers intake suite.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from pathlib import Path

from app.case_types import case_type_aliases
from app.errors import ConfigurationError
from app.flow_definitions import (
    BRANCH_ALIASES,
    BRANCHES,
    DEFAULT_BRANCH_ID,
    LOCATION_SPLIT_CASE_TYPES,
)
from app.schema import CHOICE_KINDS, FIELD_KINDS, MULTI_CHOICE, Branch, CaseType
from app.submission import RequestNumberGenerator, generate_request_number

import sys as _sys
_sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))
from shared.config_store import get_config_value

logger = logging.getLogger(__name__)

TOOL_NAME = "quote-intake"


def check_branch(branch: Branch) -> None:
    """Raise ConfigurationError if *branch* breaks a definition invariant.

    Checks: unique non-empty keys, known kinds, options present and unique
    on choice fields, and every ``visible_when`` pointing at an earlier
    field with exactly one test whose values are options of that field.
    """
    if not branch.id:
        raise ConfigurationError("Branch id must not be empty")

    declared: dict[str, object] = {}
    all_keys = set(branch.field_keys())
    for field_def in branch.fields:
        where = f"{branch.id}.{field_def.key or '<empty>'}"
        if not field_def.key:
            raise ConfigurationError(f"Field without a key in branch '{branch.id}'")
        if field_def.key in declared:
            raise ConfigurationError(f"Duplicate field key '{where}'")
        if field_def.kind not in FIELD_KINDS:
            raise ConfigurationError(f"Unknown kind '{field_def.kind}' for '{where}'")

        if field_def.kind in CHOICE_KINDS:
            values = field_def.option_values
            if not values:
                raise ConfigurationError(f"Choice field '{where}' has no options")
            if len(set(values)) != len(values):
                raise ConfigurationError(f"Duplicate option values in '{where}'")

        pattern = field_def.validation_rules.get("pattern")
        if pattern:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigurationError(f"Bad pattern for '{where}': {exc}") from exc

        cond = field_def.visible_when
        if cond is not None:
            if cond.key == field_def.key:
                raise ConfigurationError(f"'{where}' is conditioned on itself")
            if cond.key not in declared:
                if cond.key in all_keys:
                    raise ConfigurationError(
                        f"'{where}' depends on '{cond.key}', which is declared after it"
                    )
                raise ConfigurationError(f"'{where}' depends on undeclared field '{cond.key}'")
            if len(cond.tests()) != 1:
                raise ConfigurationError(
                    f"Condition on '{where}' must set exactly one test, got {cond.tests() or 'none'}"
                )
            source = branch.get_field(cond.key)
            if source is not None and source.kind in CHOICE_KINDS:
                unknown = [v for v in cond.referenced_values() if v not in source.option_values]
                if unknown:
                    raise ConfigurationError(
                        f"Condition on '{where}' compares '{cond.key}' with unknown option(s) {unknown}"
                    )
            if cond.contains is not None and source is not None and source.kind != MULTI_CHOICE:
                raise ConfigurationError(
                    f"Condition on '{where}' uses 'contains' on non multi-choice '{cond.key}'"
                )
            if source is not None and source.kind == MULTI_CHOICE and (cond.equals is not None or cond.one_of):
                raise ConfigurationError(
                    f"Condition on '{where}' compares multi-choice '{cond.key}' with "
                    f"'{cond.tests()[0]}'; use 'contains'"
                )

        declared[field_def.key] = field_def


class BranchCatalog:
    """An ordered, checked set of branches plus selection rules."""

    def __init__(
        self,
        branches: Iterable[Branch],
        default_branch_id: str | None = None,
        aliases: dict[str, str] | None = None,
        request_number_generator: Callable[[], str] = generate_request_number,
    ):
        self._branches: dict[str, Branch] = {}
        for branch in branches:
            check_branch(branch)
            if branch.id in self._branches:
                raise ConfigurationError(f"Duplicate branch id '{branch.id}'")
            self._branches[branch.id] = branch

        if default_branch_id is not None and default_branch_id not in self._branches:
            raise ConfigurationError(f"Default branch '{default_branch_id}' is not in the catalog")
        self.default_branch_id = default_branch_id

        self.aliases = dict(aliases or {})
        for alias, target in self.aliases.items():
            if target not in self._branches:
                raise ConfigurationError(f"Alias '{alias}' points at unknown branch '{target}'")

        self.request_number_generator = request_number_generator

    @classmethod
    def from_dicts(
        cls,
        items: Iterable[dict],
        default_branch_id: str | None = None,
        aliases: dict[str, str] | None = None,
        request_number_generator: Callable[[], str] = generate_request_number,
    ) -> BranchCatalog:
        """Build a catalog from JSON-shaped branch dicts."""
        try:
            branches = [Branch.from_dict(d) for d in items]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ConfigurationError(f"Malformed branch definition: {exc}") from exc
        return cls(branches, default_branch_id, aliases, request_number_generator)

    @property
    def branches(self) -> list[Branch]:
        return list(self._branches.values())

    def __contains__(self, branch_id: str) -> bool:
        return branch_id in self._branches

    def __len__(self) -> int:
        return len(self._branches)

    def get(self, branch_id: str) -> Branch:
        """Strict lookup by id; raises KeyError for unknown ids."""
        try:
            return self._branches[branch_id]
        except KeyError:
            raise KeyError(f"Unknown branch: {branch_id}") from None

    def select(self, classification: str | None) -> Branch:
        """Return the branch for *classification*, or the default branch.

        Raises ConfigurationError when nothing matches and no default is set.
        """
        value = (classification or "").strip()
        branch_id = self.aliases.get(value, value)
        if branch_id in self._branches:
            return self._branches[branch_id]
        if self.default_branch_id is not None:
            logger.debug("No branch for classification %r, using %r", value, self.default_branch_id)
            return self._branches[self.default_branch_id]
        raise ConfigurationError(
            f"No branch matches classification {value!r} and no default branch is configured"
        )


def resolve_classification(case_type: str | None, location: str | None = None) -> str:
    """Combine the case-type answer and, for family cases, the location answer.

    ``("family", "inside")`` gives ``"family-inside-us"``. Family without a
    location stays ``"family"`` and falls through to the default branch.
    """
    value = (case_type or "").strip()
    if value in LOCATION_SPLIT_CASE_TYPES and location in ("inside", "outside"):
        return f"{value}-{location}-us"
    return value


def load_catalog(case_types: Iterable[CaseType] | None = None) -> BranchCatalog:
    """Build the production catalog: built-in flows plus admin overrides.

    Admin config (``data/config/quote-intake.json``) may list
    ``disabled_branches`` to hide built-in flows and ``custom_branches``
    (branch dicts) to add new ones. The default branch cannot be disabled.
    *case_types* (the server's picker) adds aliases for case-type values
    that are not branch ids; the built-in aliases take precedence.
    """
    disabled = set(get_config_value(TOOL_NAME, "disabled_branches", []))
    disabled.discard(DEFAULT_BRANCH_ID)
    custom = get_config_value(TOOL_NAME, "custom_branches", [])

    branches = [b for b in BRANCHES if b.id not in disabled]
    try:
        branches.extend(Branch.from_dict(d) for d in custom)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Malformed custom branch in {TOOL_NAME} config: {exc}") from exc

    known = {b.id for b in branches}
    aliases = case_type_aliases(case_types or [], known)
    aliases.update({alias: target for alias, target in BRANCH_ALIASES.items() if target in known})
    return BranchCatalog(
        branches,
        default_branch_id=DEFAULT_BRANCH_ID,
        aliases=aliases,
        request_number_generator=RequestNumberGenerator(),
    )
