"""Tests for quote-intake/app/form_state.py -- visibility, pruning and answer handling."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "quote-intake"))

from app.branch_selector import BranchCatalog
from app.flow_definitions import BRANCHES, DEFAULT_BRANCH_ID
from app.form_state import FormController, coerce_answer, prune_hidden, visible_fields
from app.schema import (
    DATE,
    LONG_TEXT,
    MULTI_CHOICE,
    SHORT_TEXT,
    SINGLE_CHOICE,
    Branch,
    Condition,
    FieldDefinition,
    Option,
)


@pytest.fixture()
def catalog():
    return BranchCatalog(BRANCHES, default_branch_id=DEFAULT_BRANCH_ID)


@pytest.fixture()
def chain_branch():
    """a -> b -> c, each shown only when the previous one is "yes"."""
    yes_no = [Option("yes"), Option("no")]
    return Branch(id="chain", fields=[
        FieldDefinition("a", SINGLE_CHOICE, options=yes_no),
        FieldDefinition("b", SINGLE_CHOICE, options=yes_no, visible_when=Condition("a", equals="yes")),
        FieldDefinition("c", LONG_TEXT, visible_when=Condition("b", equals="yes")),
    ])


# ── visible_fields ───────────────────────────────────────────────────────


class TestVisibleFields:
    def test_asylum_without_answers(self, catalog):
        keys = [f.key for f in visible_fields(catalog.get("asylum"), {})]
        assert keys == ["entryMethod", "entryDate", "afraidToReturn", "inRemovalProceedings"]

    def test_asylum_afraid(self, catalog):
        keys = [f.key for f in visible_fields(catalog.get("asylum"), {"afraidToReturn": "yes"})]
        assert keys == ["entryMethod", "entryDate", "afraidToReturn", "reasonAfraid", "inRemovalProceedings"]

    def test_hidden_upstream_hides_dependents(self, chain_branch):
        # b's stale "yes" must not keep c visible once b itself is hidden
        keys = [f.key for f in visible_fields(chain_branch, {"a": "no", "b": "yes"})]
        assert keys == ["a"]

    def test_idempotent(self, chain_branch):
        answers = {"a": "yes", "b": "yes", "c": "text"}
        first = visible_fields(chain_branch, answers)
        assert visible_fields(chain_branch, answers) == first

    def test_contains_condition(self, catalog):
        other = catalog.get(DEFAULT_BRANCH_ID)
        assert "otherTopic" not in [f.key for f in visible_fields(other, {"helpTopics": ["daca"]})]
        assert "otherTopic" in [f.key for f in visible_fields(other, {"helpTopics": ["daca", "other"]})]


# ── prune_hidden / coerce_answer ─────────────────────────────────────────


def test_prune_hidden_cascades(chain_branch):
    answers = {"a": "no", "b": "yes", "c": "text"}
    removed = prune_hidden(chain_branch, answers)
    assert removed == ["b", "c"]
    assert answers == {"a": "no"}


def test_prune_hidden_ignores_unknown_keys(chain_branch):
    answers = {"a": "yes", "extra": "x"}
    assert prune_hidden(chain_branch, answers) == []
    assert answers == {"a": "yes", "extra": "x"}


class TestCoerceAnswer:
    def test_empty_values_mean_no_answer(self):
        text = FieldDefinition("t", SHORT_TEXT)
        multi = FieldDefinition("m", MULTI_CHOICE, options=[Option("x")])
        assert coerce_answer(text, None) is None
        assert coerce_answer(text, "") is None
        assert coerce_answer(multi, []) is None
        assert coerce_answer(multi, "") is None

    def test_multi_choice_becomes_list(self):
        multi = FieldDefinition("m", MULTI_CHOICE, options=[Option("x"), Option("y")])
        assert coerce_answer(multi, "x") == ["x"]
        assert coerce_answer(multi, ("x", "y")) == ["x", "y"]

    def test_text_kept_verbatim(self):
        assert coerce_answer(FieldDefinition("t", SHORT_TEXT), "  padded ") == "  padded "


# ── FormController ───────────────────────────────────────────────────────


class TestFormController:
    def test_requires_branch(self, catalog):
        controller = FormController(catalog)
        with pytest.raises(RuntimeError):
            controller.set_answer("entryMethod", "Plane")

    def test_set_answer_reveals_and_prunes(self, catalog):
        controller = FormController(catalog, "asylum")
        controller.set_answer("afraidToReturn", "yes")
        controller.set_answer("reasonAfraid", "Threats")
        assert controller.answers["reasonAfraid"] == "Threats"

        removed = controller.set_answer("afraidToReturn", "no")
        assert removed == ["reasonAfraid"]
        assert "reasonAfraid" not in controller.answers
        assert "reasonAfraid" not in controller.visible_field_keys()

    def test_clearing_trigger_prunes_dependents(self, catalog):
        controller = FormController(catalog, "asylum")
        controller.set_answers({"afraidToReturn": "yes", "reasonAfraid": "Threats"})
        assert controller.clear_answer("afraidToReturn") == ["reasonAfraid"]
        assert controller.answers == {}

    def test_unknown_key(self, catalog):
        controller = FormController(catalog, "asylum")
        with pytest.raises(KeyError):
            controller.set_answer("visaType", "B-2")

    def test_hidden_field_rejected(self, catalog):
        controller = FormController(catalog, "asylum")
        with pytest.raises(ValueError):
            controller.set_answer("reasonAfraid", "Threats")
        assert controller.answers == {}

    def test_set_answers_in_declaration_order(self, catalog):
        controller = FormController(catalog, "family-based-immigrant-visa-immediate-relative")
        # dependent listed before its trigger in the input
        controller.set_answers({"insideOverstay": "no", "location": "inside"})
        assert controller.answers == {"location": "inside", "insideOverstay": "no"}

    def test_set_answers_checks_all_keys_first(self, catalog):
        controller = FormController(catalog, "asylum")
        with pytest.raises(KeyError):
            controller.set_answers({"entryMethod": "Plane", "bogus": "x"})
        assert controller.answers == {}

    def test_branch_switch_clears_state(self, catalog):
        controller = FormController(catalog, "asylum")
        controller.set_answer("entryMethod", "Plane")
        controller.errors["entryDate"] = "This field is required"

        controller.select_branch("naturalization")
        assert controller.state.branch_id == "naturalization"
        assert controller.answers == {}
        assert controller.errors == {}

    def test_visible_answers_only(self, catalog):
        controller = FormController(catalog, DEFAULT_BRANCH_ID)
        controller.set_answers({"helpTopics": ["other"], "otherTopic": "TPS", "caseDescription": "..."})
        controller.set_answer("helpTopics", ["daca"])
        visible = set(controller.visible_field_keys())
        assert set(controller.answers) <= visible
        assert "otherTopic" not in controller.answers

    def test_batch_clearing_hidden_field_is_accepted(self, catalog):
        controller = FormController(catalog, "asylum")
        controller.set_answers({"afraidToReturn": "yes", "reasonAfraid": "Threats"})
        # a form posting its whole state sends the now-hidden field as blank
        removed = controller.set_answers({"afraidToReturn": "no", "reasonAfraid": ""})
        assert removed == ["reasonAfraid"]
        assert controller.answers == {"afraidToReturn": "no"}

    def test_rejected_batch_leaves_answers_untouched(self, catalog):
        controller = FormController(catalog, "asylum")
        controller.set_answers({"afraidToReturn": "yes", "reasonAfraid": "Threats"})
        with pytest.raises(ValueError):
            controller.set_answers({"afraidToReturn": "no", "reasonAfraid": "Still afraid"})
        assert controller.answers == {"afraidToReturn": "yes", "reasonAfraid": "Threats"}

    def test_clearing_hidden_field_alone_is_a_no_op(self, catalog):
        controller = FormController(catalog, "asylum")
        controller.set_answer("entryMethod", "Plane")
        assert controller.set_answer("reasonAfraid", "") == []
        assert controller.clear_answer("reasonAfraid") == []
        assert controller.answers == {"entryMethod": "Plane"}


# ── Pruning across every conditional field in the catalog ────────────────


def _matching_value(source: FieldDefinition, cond: Condition):
    if cond.contains is not None:
        return [cond.contains]
    value = cond.equals if cond.equals is not None else cond.one_of[0]
    return [value] if source.kind == MULTI_CHOICE else value


def _non_matching_value(source: FieldDefinition, cond: Condition):
    others = [v for v in source.option_values if v not in cond.referenced_values()]
    return [others[0]] if source.kind == MULTI_CHOICE else others[0]


def _sample_value(field_def: FieldDefinition):
    if field_def.kind == MULTI_CHOICE:
        return [field_def.option_values[0]]
    if field_def.kind == SINGLE_CHOICE:
        return field_def.option_values[0]
    if field_def.kind == DATE:
        return "2024-01-01"
    return "sample answer"


def _conditional_fields():
    cases = []
    for branch in BRANCHES:
        for field_def in branch.fields:
            cond = field_def.visible_when
            if cond is not None and branch.get_field(cond.key).kind in (SINGLE_CHOICE, MULTI_CHOICE):
                cases.append(pytest.param(branch, field_def, id=f"{branch.id}.{field_def.key}"))
    return cases


def test_catalog_has_conditional_fields():
    assert len(_conditional_fields()) >= 6


@pytest.mark.parametrize("branch,field_def", _conditional_fields())
def test_non_matching_trigger_prunes_dependent(catalog, branch, field_def):
    # reveal the dependent, walking up any chain of conditions
    reveal = {}
    cond = field_def.visible_when
    while cond is not None:
        source = branch.get_field(cond.key)
        reveal[source.key] = _matching_value(source, cond)
        cond = source.visible_when

    controller = FormController(catalog, branch.id)
    controller.set_answers({**reveal, field_def.key: _sample_value(field_def)})
    assert field_def.key in controller.answers

    trigger = branch.get_field(field_def.visible_when.key)
    removed = controller.set_answer(trigger.key, _non_matching_value(trigger, field_def.visible_when))
    assert field_def.key in removed
    assert field_def.key not in controller.answers
    assert field_def.key not in controller.visible_field_keys()
