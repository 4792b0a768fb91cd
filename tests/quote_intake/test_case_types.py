"""Tests for quote-intake/app/case_types.py -- the grouped case-type picker."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "quote-intake"))

from app.case_types import (
    CATEGORY_LABELS_ES,
    active_case_types,
    case_type_aliases,
    category_label,
    group_by_category,
)
from app.flow_definitions import BRANCHES, CASE_TYPES, CATEGORY_BRANCHES, DEFAULT_BRANCH_ID
from app.schema import CaseType

_BRANCH_IDS = [b.id for b in BRANCHES]


def _ct(value: str, category: str, order: int, active: bool = True) -> CaseType:
    return CaseType(value, {"en": value}, category=category, display_order=order, is_active=active)


# ── active_case_types ────────────────────────────────────────────────────


def test_inactive_types_are_dropped_and_rest_sorted():
    types = [_ct("b", "X", 3), _ct("a", "X", 1), _ct("gone", "X", 0, active=False)]
    assert [ct.value for ct in active_case_types(types)] == ["a", "b"]


def test_equal_display_order_keeps_input_order():
    types = [_ct("first", "X", 1), _ct("second", "X", 1)]
    assert [ct.value for ct in active_case_types(types)] == ["first", "second"]


# ── group_by_category ────────────────────────────────────────────────────


def test_categories_ordered_by_their_first_case_type():
    types = [
        _ct("n400", "Citizenship & Naturalization", 5),
        _ct("asylum-defensive", "Asylum", 2),
        _ct("asylum-affirmative", "Asylum", 1),
        _ct("i130", "Family-Based Immigrant Visa", 3),
    ]
    groups = group_by_category(types)
    assert [category for category, _ in groups] == [
        "Asylum", "Family-Based Immigrant Visa", "Citizenship & Naturalization",
    ]
    assert [ct.value for ct in groups[0][1]] == ["asylum-affirmative", "asylum-defensive"]


def test_category_with_only_inactive_types_disappears():
    types = [_ct("asylum", "Asylum", 1), _ct("vawa", "VAWA", 2, active=False)]
    assert [category for category, _ in group_by_category(types)] == ["Asylum"]


def test_built_in_picker_groups():
    groups = dict(group_by_category(CASE_TYPES))
    assert [ct.value for ct in groups["Family-Based Immigration"]] == [
        "family", "family-based-immigrant-visa-immediate-relative", "removal-of-conditions",
    ]
    assert list(groups)[-1] == "Other"


# ── category_label ───────────────────────────────────────────────────────


def test_category_label_in_spanish():
    assert category_label("Asylum", "es") == "Asilo"
    assert category_label("Asylum", "en") == "Asylum"


def test_unknown_category_keeps_its_name():
    assert category_label("Special Immigrant Juvenile", "es") == "Special Immigrant Juvenile"


def test_every_built_in_category_has_a_spanish_label():
    assert {ct.category for ct in CASE_TYPES} <= set(CATEGORY_LABELS_ES)


# ── case_type_aliases ────────────────────────────────────────────────────


def test_aliases_follow_category():
    types = [
        _ct("asylum-defensive", "Asylum", 1),
        _ct("n400", "Citizenship & Naturalization", 2),
        _ct("k1", "Fiancé Visa", 3),
    ]
    assert case_type_aliases(types, _BRANCH_IDS) == {
        "asylum-defensive": "asylum",
        "n400": "naturalization",
        "k1": "k1-fiance-visa",
    }


def test_branch_ids_and_unmapped_categories_get_no_alias():
    types = [_ct("asylum", "Asylum", 1), _ct("vawa-self-petition", "Violence Against Women Act (VAWA)", 2)]
    assert case_type_aliases(types, _BRANCH_IDS) == {}


def test_alias_skipped_when_target_branch_is_missing():
    types = [_ct("asylum-defensive", "Asylum", 1)]
    assert case_type_aliases(types, [DEFAULT_BRANCH_ID]) == {}


def test_category_targets_are_real_branches():
    assert set(CATEGORY_BRANCHES.values()) <= set(_BRANCH_IDS)


# ── CaseType.from_api ────────────────────────────────────────────────────


def test_from_api_reads_camel_case():
    ct = CaseType.from_api({
        "id": 4, "value": "removal-of-conditions", "label": "Removal of Conditions",
        "labelEs": "Remoción de Condiciones", "description": "I-751", "descriptionEs": "I-751",
        "category": "Family-Based Immigrant Visa", "displayOrder": "7", "isActive": False,
    })
    assert ct.label == {"en": "Removal of Conditions", "es": "Remoción de Condiciones"}
    assert ct.display_order == 7
    assert ct.is_active is False
    assert ct.to_dict()["category"] == "Family-Based Immigrant Visa"
