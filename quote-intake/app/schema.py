"""Data models for the Quote Intake form engine.

Dataclasses for field definitions, visibility conditions, branches, live
form state and the compiled submission payload. Definitions round-trip
through plain dicts via to_dict/from_dict so branch catalogs can be loaded
from the case-type API or from admin config.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

# Field kinds
SHORT_TEXT = "short-text"
LONG_TEXT = "long-text"
DATE = "date"
SINGLE_CHOICE = "single-choice"
MULTI_CHOICE = "multi-choice"

FIELD_KINDS = (SHORT_TEXT, LONG_TEXT, DATE, SINGLE_CHOICE, MULTI_CHOICE)
TEXT_KINDS = (SHORT_TEXT, LONG_TEXT)
CHOICE_KINDS = (SINGLE_CHOICE, MULTI_CHOICE)

# locale code -> display string, e.g. {"en": "Asylum", "es": "Asilo"}
LocalizedText = dict[str, str]


def as_localized(value: Any) -> LocalizedText:
    """Accept a bare string (treated as English) or a locale mapping."""
    if value is None:
        return {}
    if isinstance(value, str):
        return {"en": value} if value else {}
    return {str(k): str(v) for k, v in dict(value).items()}


def localize(text: LocalizedText, locale: str = "en") -> str:
    """Pick the string for *locale*, falling back to English, then any."""
    if not text:
        return ""
    if locale in text:
        return text[locale]
    if "en" in text:
        return text["en"]
    return next(iter(text.values()))


@dataclass
class Option:
    """One choice of a single- or multi-choice field."""

    value: str
    label: LocalizedText = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict | str) -> Option:
        if isinstance(d, str):
            return cls(value=d, label={"en": d})
        return cls(value=str(d["value"]), label=as_localized(d.get("label", d["value"])))


@dataclass
class Condition:
    """Visibility predicate over one earlier field's answer.

    Exactly one test is expected: ``equals``, ``one_of``, ``contains`` or
    ``answered``. An unanswered field never satisfies equals/one_of/contains.
    """

    key: str
    equals: str | None = None
    one_of: list[str] = field(default_factory=list)
    contains: str | None = None
    answered: bool | None = None

    def tests(self) -> list[str]:
        """Names of the tests this condition sets."""
        names = []
        if self.equals is not None:
            names.append("equals")
        if self.one_of:
            names.append("one_of")
        if self.contains is not None:
            names.append("contains")
        if self.answered is not None:
            names.append("answered")
        return names

    def referenced_values(self) -> list[str]:
        """Option values this condition compares against."""
        values = list(self.one_of)
        if self.equals is not None:
            values.append(self.equals)
        if self.contains is not None:
            values.append(self.contains)
        return values

    def evaluate(self, answers: dict[str, Any]) -> bool:
        present = self.key in answers
        if self.answered is not None:
            return present is self.answered
        if not present:
            return False
        value = answers[self.key]
        if self.equals is not None:
            return value == self.equals
        if self.one_of:
            return value in self.one_of
        if self.contains is not None:
            return isinstance(value, (list, tuple, set, frozenset)) and self.contains in value
        return False

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v not in (None, [])}

    @classmethod
    def from_dict(cls, d: dict) -> Condition:
        return cls(
            key=str(d["key"]),
            equals=d.get("equals"),
            one_of=[str(v) for v in d.get("one_of", [])],
            contains=d.get("contains"),
            answered=d.get("answered"),
        )


@dataclass
class FieldDefinition:
    """A single question within a branch."""

    key: str
    kind: str                  # one of FIELD_KINDS
    label: LocalizedText = field(default_factory=dict)
    help_text: LocalizedText = field(default_factory=dict)
    required: bool = False
    visible_when: Condition | None = None
    options: list[Option] = field(default_factory=list)
    placeholder: LocalizedText = field(default_factory=dict)
    required_message: LocalizedText = field(default_factory=dict)
    validation_rules: dict = field(default_factory=dict)

    @property
    def option_values(self) -> list[str]:
        return [o.value for o in self.options]

    def option_label(self, value: str, locale: str = "en") -> str:
        for option in self.options:
            if option.value == value:
                return localize(option.label, locale) or value
        return value

    def to_dict(self) -> dict:
        d = asdict(self)
        d["visible_when"] = self.visible_when.to_dict() if self.visible_when else None
        return d

    @classmethod
    def from_dict(cls, d: dict) -> FieldDefinition:
        cond = d.get("visible_when")
        return cls(
            key=str(d.get("key", "")),
            kind=str(d.get("kind", SHORT_TEXT)),
            label=as_localized(d.get("label")),
            help_text=as_localized(d.get("help_text")),
            required=bool(d.get("required", False)),
            visible_when=Condition.from_dict(cond) if cond else None,
            options=[Option.from_dict(o) for o in d.get("options", [])],
            placeholder=as_localized(d.get("placeholder")),
            required_message=as_localized(d.get("required_message")),
            validation_rules=dict(d.get("validation_rules") or {}),
        )


@dataclass
class Branch:
    """An ordered question set for one case type or situation."""

    id: str
    fields: list[FieldDefinition] = field(default_factory=list)
    label: LocalizedText = field(default_factory=dict)
    description: LocalizedText = field(default_factory=dict)

    def field_keys(self) -> list[str]:
        return [f.key for f in self.fields]

    def get_field(self, key: str) -> FieldDefinition | None:
        for f in self.fields:
            if f.key == key:
                return f
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": dict(self.label),
            "description": dict(self.description),
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, d: dict) -> Branch:
        return cls(
            id=str(d["id"]),
            fields=[FieldDefinition.from_dict(f) for f in d.get("fields", [])],
            label=as_localized(d.get("label", d["id"])),
            description=as_localized(d.get("description")),
        )


@dataclass
class FormState:
    """Live answers for the active branch of one intake session."""

    branch_id: str
    answers: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "branch_id": self.branch_id,
            "answers": {k: list(v) if isinstance(v, list) else v for k, v in self.answers.items()},
            "errors": dict(self.errors),
        }


@dataclass
class SubmissionPayload:
    """Canonical request handed to the request-creation endpoint."""

    request_number: str
    branch_id: str
    answers: dict[str, Any]
    case_type_label: str = ""
    locale: str = "en"
    submitted_at: str | None = None  # assigned by the server

    def to_dict(self) -> dict:
        """Wire body in the server's camelCase shape."""
        return {
            "requestNumber": self.request_number,
            "branchId": self.branch_id,
            "answers": {k: list(v) if isinstance(v, list) else v for k, v in self.answers.items()},
            "caseTypeLabel": self.case_type_label,
            "locale": self.locale,
        }


@dataclass
class HandOff:
    """Result of a successful submit: the payload and the collaborator's reply."""

    payload: SubmissionPayload
    response: Any = None


@dataclass
class CaseType:
    """One entry of the case-type picker, as served by ``/api/case-types``."""

    value: str
    label: LocalizedText = field(default_factory=dict)
    description: LocalizedText = field(default_factory=dict)
    category: str = ""
    display_order: int = 0
    is_active: bool = True

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_api(cls, d: dict) -> CaseType:
        """Parse the server's camelCase record (``labelEs``, ``displayOrder``...)."""
        label = {"en": str(d.get("label") or d["value"])}
        if d.get("labelEs"):
            label["es"] = str(d["labelEs"])
        description = as_localized(d.get("description"))
        if d.get("descriptionEs"):
            description["es"] = str(d["descriptionEs"])
        return cls(
            value=str(d["value"]),
            label=label,
            description=description,
            category=str(d.get("category") or "Other"),
            display_order=int(d.get("displayOrder") or 0),
            is_active=bool(d.get("isActive", True)),
        )
