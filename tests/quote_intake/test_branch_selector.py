"""Tests for quote-intake/app/branch_selector.py -- catalog checks and branch selection."""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "quote-intake"))

import shared.config_store as config_mod
from app.branch_selector import BranchCatalog, check_branch, load_catalog, resolve_classification
from app.errors import ConfigurationError
from app.flow_definitions import BRANCHES, DEFAULT_BRANCH_ID
from app.schema import (
    LONG_TEXT,
    MULTI_CHOICE,
    SHORT_TEXT,
    SINGLE_CHOICE,
    Branch,
    CaseType,
    Condition,
    FieldDefinition,
    Option,
)


def _yes_no_field(key: str = "q1") -> FieldDefinition:
    return FieldDefinition(key, SINGLE_CHOICE, options=[Option("yes"), Option("no")])


def _branch(*fields: FieldDefinition, branch_id: str = "b") -> Branch:
    return Branch(id=branch_id, fields=list(fields))


# ── check_branch ─────────────────────────────────────────────────────────


class TestCheckBranch:
    def test_builtin_branches_are_valid(self):
        for branch in BRANCHES:
            check_branch(branch)

    def test_empty_branch_id(self):
        with pytest.raises(ConfigurationError):
            check_branch(Branch(id=""))

    def test_duplicate_key(self):
        with pytest.raises(ConfigurationError, match="Duplicate field key"):
            check_branch(_branch(FieldDefinition("a", SHORT_TEXT), FieldDefinition("a", LONG_TEXT)))

    def test_unknown_kind(self):
        with pytest.raises(ConfigurationError, match="Unknown kind"):
            check_branch(_branch(FieldDefinition("a", "slider")))

    def test_choice_without_options(self):
        with pytest.raises(ConfigurationError, match="no options"):
            check_branch(_branch(FieldDefinition("a", SINGLE_CHOICE)))

    def test_duplicate_option_values(self):
        field_def = FieldDefinition("a", MULTI_CHOICE, options=[Option("x"), Option("x")])
        with pytest.raises(ConfigurationError, match="Duplicate option"):
            check_branch(_branch(field_def))

    def test_bad_pattern(self):
        field_def = FieldDefinition("a", SHORT_TEXT, validation_rules={"pattern": "(["})
        with pytest.raises(ConfigurationError, match="Bad pattern"):
            check_branch(_branch(field_def))

    def test_forward_reference(self):
        dependent = FieldDefinition("detail", LONG_TEXT, visible_when=Condition("q1", equals="yes"))
        with pytest.raises(ConfigurationError, match="declared after"):
            check_branch(_branch(dependent, _yes_no_field()))

    def test_self_reference(self):
        field_def = FieldDefinition("q1", SINGLE_CHOICE, options=[Option("yes")],
                                    visible_when=Condition("q1", equals="yes"))
        with pytest.raises(ConfigurationError, match="itself"):
            check_branch(_branch(field_def))

    def test_undeclared_reference(self):
        dependent = FieldDefinition("detail", LONG_TEXT, visible_when=Condition("ghost", answered=True))
        with pytest.raises(ConfigurationError, match="undeclared"):
            check_branch(_branch(dependent))

    def test_condition_needs_exactly_one_test(self):
        none_set = FieldDefinition("detail", LONG_TEXT, visible_when=Condition("q1"))
        with pytest.raises(ConfigurationError, match="exactly one test"):
            check_branch(_branch(_yes_no_field(), none_set))
        two_set = FieldDefinition("detail", LONG_TEXT,
                                  visible_when=Condition("q1", equals="yes", one_of=["no"]))
        with pytest.raises(ConfigurationError, match="exactly one test"):
            check_branch(_branch(_yes_no_field(), two_set))

    def test_condition_value_must_be_an_option(self):
        dependent = FieldDefinition("detail", LONG_TEXT, visible_when=Condition("q1", equals="maybe"))
        with pytest.raises(ConfigurationError, match="unknown option"):
            check_branch(_branch(_yes_no_field(), dependent))

    def test_contains_requires_multi_choice(self):
        dependent = FieldDefinition("detail", LONG_TEXT, visible_when=Condition("q1", contains="yes"))
        with pytest.raises(ConfigurationError, match="contains"):
            check_branch(_branch(_yes_no_field(), dependent))

    @pytest.mark.parametrize("condition", [
        Condition("topics", equals="daca"),
        Condition("topics", one_of=["daca", "tps"]),
    ])
    def test_equals_on_multi_choice_rejected(self, condition):
        topics = FieldDefinition("topics", MULTI_CHOICE, options=[Option("daca"), Option("tps")])
        dependent = FieldDefinition("detail", LONG_TEXT, visible_when=condition)
        with pytest.raises(ConfigurationError, match="use 'contains'"):
            check_branch(_branch(topics, dependent))

    def test_answered_on_text_field_is_fine(self):
        check_branch(_branch(
            FieldDefinition("name", SHORT_TEXT),
            FieldDefinition("nickname", SHORT_TEXT, visible_when=Condition("name", answered=True)),
        ))


# ── BranchCatalog ────────────────────────────────────────────────────────


@pytest.fixture()
def catalog():
    return BranchCatalog(BRANCHES, default_branch_id=DEFAULT_BRANCH_ID,
                         aliases={"asylum-affirmative": "asylum"})


class TestBranchCatalog:
    def test_select_exact(self, catalog):
        assert catalog.select("asylum").id == "asylum"

    def test_select_alias(self, catalog):
        assert catalog.select("asylum-affirmative").id == "asylum"

    def test_unknown_falls_back_to_default(self, catalog):
        assert catalog.select("tps").id == DEFAULT_BRANCH_ID
        assert catalog.select(None).id == DEFAULT_BRANCH_ID
        assert catalog.select("").id == DEFAULT_BRANCH_ID

    def test_no_default_raises(self):
        catalog = BranchCatalog(BRANCHES)
        with pytest.raises(ConfigurationError, match="no default"):
            catalog.select("tps")

    def test_get_is_strict(self, catalog):
        assert catalog.get("naturalization").id == "naturalization"
        with pytest.raises(KeyError):
            catalog.get("asylum-affirmative")

    def test_duplicate_branch_id(self):
        with pytest.raises(ConfigurationError, match="Duplicate branch id"):
            BranchCatalog([BRANCHES[0], BRANCHES[0]])

    def test_unknown_default(self):
        with pytest.raises(ConfigurationError, match="Default branch"):
            BranchCatalog(BRANCHES, default_branch_id="missing")

    def test_alias_to_unknown_branch(self):
        with pytest.raises(ConfigurationError, match="Alias"):
            BranchCatalog(BRANCHES, aliases={"x": "missing"})

    def test_invalid_branch_rejected_at_load(self):
        broken = _branch(FieldDefinition("a", SINGLE_CHOICE), branch_id="broken")
        with pytest.raises(ConfigurationError):
            BranchCatalog([*BRANCHES, broken])

    def test_from_dicts(self):
        catalog = BranchCatalog.from_dicts(
            [{"id": "tps", "label": {"en": "TPS", "es": "TPS"},
              "fields": [{"key": "country", "kind": "short-text", "required": True}]}],
            default_branch_id="tps",
        )
        assert "tps" in catalog
        assert len(catalog) == 1
        assert catalog.select("anything").fields[0].required is True

    @pytest.mark.parametrize("items", [
        [{"fields": []}],
        [{"id": "tps", "fields": ["not-a-dict"]}],
        [{"id": "tps", "fields": [{"key": "q", "visible_when": "yes"}]}],
        ["tps"],
    ])
    def test_from_dicts_malformed(self, items):
        with pytest.raises(ConfigurationError, match="Malformed"):
            BranchCatalog.from_dicts(items)

    def test_branches_keep_declaration_order(self, catalog):
        assert [b.id for b in catalog.branches] == [b.id for b in BRANCHES]


# ── resolve_classification ───────────────────────────────────────────────


class TestResolveClassification:
    def test_family_inside(self):
        assert resolve_classification("family", "inside") == "family-inside-us"

    def test_family_outside(self):
        assert resolve_classification("family", "outside") == "family-outside-us"

    def test_family_without_location(self):
        assert resolve_classification("family") == "family"

    def test_other_case_types_ignore_location(self):
        assert resolve_classification("asylum", "inside") == "asylum"

    def test_none(self):
        assert resolve_classification(None) == ""


# ── load_catalog ─────────────────────────────────────────────────────────


class TestLoadCatalog:
    @pytest.fixture(autouse=True)
    def _isolate_config_dir(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        with patch.object(config_mod, "CONFIG_DIR", config_dir):
            yield config_dir

    def test_defaults(self):
        catalog = load_catalog()
        assert len(catalog) == len(BRANCHES)
        assert catalog.default_branch_id == DEFAULT_BRANCH_ID
        assert catalog.select("inside").id == "family-inside-us"
        assert catalog.select("citizenship-naturalization-n400").id == "naturalization"

    def test_disabled_branches_and_aliases(self):
        config_mod.save_config("quote-intake", {"disabled_branches": ["asylum", DEFAULT_BRANCH_ID]})
        catalog = load_catalog()
        assert "asylum" not in catalog
        assert DEFAULT_BRANCH_ID in catalog
        assert "asylum-affirmative" not in catalog.aliases
        assert catalog.select("asylum").id == DEFAULT_BRANCH_ID

    def test_custom_branch(self):
        config_mod.save_config("quote-intake", {"custom_branches": [
            {"id": "tps", "fields": [{"key": "country", "kind": "short-text"}]},
        ]})
        assert load_catalog().select("tps").id == "tps"

    def test_broken_custom_branch(self):
        config_mod.save_config("quote-intake", {"custom_branches": [
            {"id": "tps", "fields": [{"key": "pick", "kind": "single-choice"}]},
        ]})
        with pytest.raises(ConfigurationError):
            load_catalog()

    def test_custom_branch_with_non_dict_field(self):
        config_mod.save_config("quote-intake", {"custom_branches": [
            {"id": "tps", "fields": ["country"]},
        ]})
        with pytest.raises(ConfigurationError, match="Malformed custom branch"):
            load_catalog()

    def test_server_case_types_alias_through_category(self):
        case_types = [
            CaseType("asylum-defensive", category="Asylum"),
            CaseType("citizenship-naturalization-n400", category="Asylum"),
            CaseType("k1-visa", category="K-1 Fiancé(e) Visa"),
            CaseType("vawa", category="Violence Against Women Act (VAWA)"),
        ]
        catalog = load_catalog(case_types)
        assert catalog.select("asylum-defensive").id == "asylum"
        assert catalog.select("k1-visa").id == "k1-fiance-visa"
        assert catalog.select("vawa").id == DEFAULT_BRANCH_ID
        # the built-in alias wins over the category mapping
        assert catalog.select("citizenship-naturalization-n400").id == "naturalization"

    def test_request_numbers_do_not_repeat(self):
        catalog = load_catalog()
        numbers = [catalog.request_number_generator() for _ in range(200)]
        assert len(set(numbers)) == 200
