"""Case-type picker for the Quote Intake tool.

The picker lists the case types the server publishes at ``/api/case-types``
(falling back to the built-in list), grouped by category. Both categories
and the case types inside them are ordered by ``display_order``. Server case
types that are not built-in branch ids are mapped onto a branch through
their category, so ``asylum-defensive`` still gets the asylum questions.
"""

from __future__ import annotations

from collections.abc import Iterable

from app.flow_definitions import CATEGORY_BRANCHES
from app.schema import CaseType

CATEGORY_LABELS_ES: dict[str, str] = {
    "Family-Based Immigration": "Inmigración Basada en Familia",
    "Family-Based Immigrant Visa": "Visa de Inmigrante Basada en Familia",
    "Fiancé Visa": "Visa K-1 de Prometido(a)",
    "K-1 Fiancé(e) Visa": "Visa K-1 de Prometido(a)",
    "Citizenship & Naturalization": "Ciudadanía y Naturalización",
    "Asylum": "Asilo",
    "Deportation Defense": "Defensa de Deportación",
    "Deportation Defense / Removal Proceedings": "Defensa de Deportación",
    "Violence Against Women Act": "Ley de Violencia Contra las Mujeres (VAWA)",
    "Violence Against Women Act (VAWA)": "Ley de Violencia Contra las Mujeres (VAWA)",
    "Other": "Otro",
}


def active_case_types(case_types: Iterable[CaseType]) -> list[CaseType]:
    """Active case types in display order (ties keep their input order)."""
    return sorted((ct for ct in case_types if ct.is_active), key=lambda ct: ct.display_order)


def group_by_category(case_types: Iterable[CaseType]) -> list[tuple[str, list[CaseType]]]:
    """Group active case types by category.

    Categories are ordered by the lowest ``display_order`` among their case
    types.
    """
    groups: dict[str, list[CaseType]] = {}
    for ct in active_case_types(case_types):
        groups.setdefault(ct.category, []).append(ct)
    # active_case_types is sorted, so each group's first item has its minimum
    return sorted(groups.items(), key=lambda item: item[1][0].display_order)


def category_label(category: str, locale: str = "en") -> str:
    if locale == "es":
        return CATEGORY_LABELS_ES.get(category, category)
    return category


def case_type_aliases(case_types: Iterable[CaseType], branch_ids: Iterable[str]) -> dict[str, str]:
    """Map case-type values that are not branch ids to a branch via their category.

    Only categories listed in CATEGORY_BRANCHES produce an alias, and only
    when the target branch is in *branch_ids*.
    """
    known = set(branch_ids)
    aliases: dict[str, str] = {}
    for ct in case_types:
        target = CATEGORY_BRANCHES.get(ct.category)
        if ct.value in known or target not in known:
            continue
        aliases[ct.value] = target
    return aliases
