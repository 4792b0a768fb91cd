"""FastAPI backend for the Quote Intake tool.

Exposes the branch catalog and drives intake sessions: pick a case type,
answer the visible questions, validate, and submit to the legal-request
endpoint. Sessions live in process memory, one per client, and are
dropped once handed off or cancelled. Also serves the case-type picker
and the request-status lookup.

Part of the LinkToLawyers intake suite.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from app import audit_log, submission_client
from app.branch_selector import BranchCatalog, load_catalog, resolve_classification
from app.case_types import active_case_types, category_label, group_by_category
from app.config import get_settings
from app.errors import InvalidTransition, SubmissionError, ValidationError
from app.flow_definitions import CASE_TYPES, LOCATION_SPLIT_CASE_TYPES
from app.request_status import status_info
from app.schema import CaseType, FieldDefinition, localize
from app.session import ANSWERING, IntakeSession
from app.submission import is_request_number, normalize_request_number
from app.submission_client import ContactDetails
from app.translations import normalize_locale, t
from app.validator import validate, validate_contact

logger = logging.getLogger(__name__)

app = FastAPI(title="Quote Intake API")

_catalog: BranchCatalog | None = None
_case_types: list[CaseType] | None = None
_SESSIONS: dict[str, IntakeSession] = {}


def get_case_types() -> list[CaseType]:
    """The server's case-type picker, or the built-in one if it is unreachable."""
    global _case_types
    if _case_types is None:
        try:
            _case_types = submission_client.fetch_case_types()
        except SubmissionError as exc:
            logger.warning("Case types unavailable, using built-in list: %s", exc)
            _case_types = active_case_types(CASE_TYPES)
    return _case_types


def get_catalog() -> BranchCatalog:
    """Load the catalog once per process."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog(get_case_types())
    return _catalog


def reset_catalog() -> None:
    """Force a reload of case types and branches on next use."""
    global _catalog, _case_types
    _catalog = None
    _case_types = None


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------

class CreateSessionRequest(BaseModel):
    """Start a session, optionally with the case type already chosen."""

    case_type: str | None = None
    location: str | None = None
    locale: str = "en"


class SelectBranchRequest(BaseModel):
    case_type: str
    location: str | None = None


class AnswersRequest(BaseModel):
    answers: dict[str, Any]


class ValidateAnswersRequest(BaseModel):
    answers: dict[str, Any]
    locale: str = "en"


class ContactRequest(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""
    location: str = ""
    agree_to_terms: bool = False


class SubmitRequest(BaseModel):
    contact: ContactRequest


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _field_view(field_def: FieldDefinition, locale: str) -> dict[str, Any]:
    return {
        "key": field_def.key,
        "kind": field_def.kind,
        "label": localize(field_def.label, locale),
        "help_text": localize(field_def.help_text, locale),
        "placeholder": localize(field_def.placeholder, locale),
        "required": field_def.required,
        "options": [
            {"value": o.value, "label": localize(o.label, locale) or o.value}
            for o in field_def.options
        ],
        "visible_when": field_def.visible_when.to_dict() if field_def.visible_when else None,
    }


def _session_view(session_id: str, session: IntakeSession) -> dict[str, Any]:
    view: dict[str, Any] = {
        "session_id": session_id,
        "status": session.status,
        "locale": session.locale,
        "request_number": session.request_number,
        "branch_id": None,
        "branch_label": None,
        "answers": {},
        "errors": {},
        "visible_fields": [],
    }
    if session.state is not None and session.branch is not None:
        state = session.state.to_dict()
        view.update({
            "branch_id": session.branch.id,
            "branch_label": localize(session.branch.label, session.locale),
            "answers": state["answers"],
            "errors": state["errors"],
            "visible_fields": [_field_view(f, session.locale) for f in session.get_visible_fields()],
        })
    return view


def _get_session(session_id: str) -> IntakeSession:
    session = _SESSIONS.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return session


# ---------------------------------------------------------------------------
# Catalog endpoints
# ---------------------------------------------------------------------------

@app.get("/api/case-types")
def list_case_types(locale: str = "en") -> list[dict[str, Any]]:
    """Active case types grouped by category, both in display order."""
    locale = normalize_locale(locale)
    return [
        {
            "category": category,
            "label": category_label(category, locale),
            "case_types": [
                {
                    "value": ct.value,
                    "label": localize(ct.label, locale) or ct.value,
                    "description": localize(ct.description, locale),
                    "needs_location": ct.value in LOCATION_SPLIT_CASE_TYPES,
                }
                for ct in items
            ],
        }
        for category, items in group_by_category(get_case_types())
    ]


@app.post("/api/catalog/reload")
def reload_catalog() -> dict[str, Any]:
    """Re-read case types and admin config, e.g. after a branch is disabled."""
    reset_catalog()
    catalog = get_catalog()
    audit_log.log_action("catalog_reloaded", details={"branches": len(catalog)})
    return {"branches": [b.id for b in catalog.branches], "case_types": len(get_case_types())}


@app.get("/api/branches")
def list_branches(locale: str = "en") -> list[dict[str, Any]]:
    """List the available case-type branches in display order."""
    locale = normalize_locale(locale)
    return [
        {
            "id": b.id,
            "label": localize(b.label, locale),
            "description": localize(b.description, locale),
            "field_count": len(b.fields),
        }
        for b in get_catalog().branches
    ]


@app.get("/api/branches/{branch_id}/fields")
def get_branch_fields(branch_id: str, locale: str = "en") -> dict[str, Any]:
    """All field definitions of a branch, including conditional ones."""
    locale = normalize_locale(locale)
    try:
        branch = get_catalog().get(branch_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown branch: {branch_id}")
    return {
        "id": branch.id,
        "label": localize(branch.label, locale),
        "fields": [_field_view(f, locale) for f in branch.fields],
    }


@app.post("/api/branches/{branch_id}/validate")
def validate_answers(branch_id: str, request: ValidateAnswersRequest) -> dict[str, Any]:
    """Validate a full answer set without creating a session."""
    try:
        branch = get_catalog().get(branch_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown branch: {branch_id}")
    errors = validate(branch, request.answers, normalize_locale(request.locale))
    return {"branch_id": branch_id, "valid": not errors, "errors": errors}


# ---------------------------------------------------------------------------
# Session endpoints
# ---------------------------------------------------------------------------

@app.post("/api/sessions")
def create_session(request: CreateSessionRequest) -> dict[str, Any]:
    """Start an intake session."""
    session = IntakeSession(get_catalog(), locale=request.locale)
    session_id = str(uuid.uuid4())[:8]
    _SESSIONS[session_id] = session
    if request.case_type:
        branch = session.select_branch(resolve_classification(request.case_type, request.location))
        audit_log.log_action("branch_selected", session_id=session_id, branch_id=branch.id)
    return _session_view(session_id, session)


@app.get("/api/sessions/{session_id}")
def get_session(session_id: str) -> dict[str, Any]:
    return _session_view(session_id, _get_session(session_id))


@app.put("/api/sessions/{session_id}/branch")
def select_branch(session_id: str, request: SelectBranchRequest) -> dict[str, Any]:
    """Switch branch. All answers and errors are cleared."""
    session = _get_session(session_id)
    try:
        branch = session.select_branch(resolve_classification(request.case_type, request.location))
    except InvalidTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    audit_log.log_action("branch_selected", session_id=session_id, branch_id=branch.id)
    return _session_view(session_id, session)


@app.put("/api/sessions/{session_id}/answers")
def set_answers(session_id: str, request: AnswersRequest) -> dict[str, Any]:
    """Apply answers; answers of fields that become hidden are dropped."""
    session = _get_session(session_id)
    try:
        removed = session.set_answers(request.answers)
    except InvalidTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=exc.args[0] if exc.args else str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    view = _session_view(session_id, session)
    view["cleared"] = removed
    return view


@app.post("/api/sessions/{session_id}/validate")
def validate_session(session_id: str) -> dict[str, Any]:
    session = _get_session(session_id)
    try:
        errors = session.validate()
    except InvalidTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return {"valid": not errors, "errors": errors}


@app.post("/api/sessions/{session_id}/submit")
def submit_session(session_id: str, request: SubmitRequest) -> dict[str, Any]:
    """Validate answers and contact details, then create the legal request.

    422 carries every field error at once; 502 means the request endpoint
    failed and the client may retry with the same request number.
    """
    session = _get_session(session_id)
    if session.status != ANSWERING:
        raise HTTPException(status_code=409, detail=f"Not allowed while session is {session.status}")

    contact_errors = validate_contact(request.contact, session.locale)
    if contact_errors:
        errors = {**session.validate(), **contact_errors}
        audit_log.log_action(
            "submit_rejected", session_id=session_id, branch_id=session.branch.id,
            details={"fields": sorted(errors)},
        )
        raise HTTPException(status_code=422, detail={"errors": errors})

    contact = ContactDetails(**request.contact.model_dump())
    branch = session.branch
    session.submit_fn = submission_client.make_submit_fn(contact, branch)
    try:
        handoff = session.submit()
    except ValidationError as exc:
        audit_log.log_action(
            "submit_rejected", session_id=session_id, branch_id=branch.id,
            details={"fields": sorted(exc.errors)},
        )
        raise HTTPException(status_code=422, detail={"errors": exc.errors})
    except SubmissionError as exc:
        audit_log.log_action(
            "submit_failed", session_id=session_id, branch_id=branch.id,
            request_number=session.request_number or "", details={"error": str(exc)},
        )
        raise HTTPException(status_code=502, detail={"error": t("submit_failed", session.locale)})

    # A handed-off session has nothing left to serve
    _SESSIONS.pop(session_id, None)
    request_number = (handoff.response or {}).get("requestNumber") or handoff.payload.request_number
    audit_log.log_action(
        "handed_off", session_id=session_id, branch_id=branch.id, request_number=request_number,
    )

    confirmation_sent = False
    if get_settings().send_confirmation:
        try:
            submission_client.send_confirmation(request_number, session.locale)
            confirmation_sent = True
        except SubmissionError as exc:
            logger.warning("Confirmation email for %s failed: %s", request_number, exc)

    return {
        "success": True,
        "data": {
            "requestNumber": request_number,
            "branchId": branch.id,
            "confirmationSent": confirmation_sent,
        },
    }


@app.delete("/api/sessions/{session_id}")
def cancel_session(session_id: str) -> dict[str, str]:
    """Cancel a session; its answers are discarded."""
    session = _get_session(session_id)
    try:
        session.cancel()
    except InvalidTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    _SESSIONS.pop(session_id, None)
    audit_log.log_action("cancelled", session_id=session_id)
    return {"status": "cancelled", "session_id": session_id}


# ---------------------------------------------------------------------------
# Tracking
# ---------------------------------------------------------------------------

@app.get("/api/requests/{request_number}")
def track_request(request_number: str, locale: str = "en") -> dict[str, Any]:
    """Status of a submitted request, looked up by its tracking number."""
    locale = normalize_locale(locale)
    number = normalize_request_number(request_number)
    if not is_request_number(number):
        raise HTTPException(status_code=400, detail=t("track_invalid", locale))
    try:
        record = submission_client.get_legal_request(number)
    except SubmissionError as exc:
        logger.warning("Tracking lookup for %s failed: %s", number, exc)
        raise HTTPException(status_code=502, detail=t("track_failed", locale))
    if record is None:
        raise HTTPException(status_code=404, detail=t("track_not_found", locale, number=number))
    return {
        "request_number": record.get("requestNumber") or number,
        "case_type": record.get("caseType", ""),
        "created_at": record.get("createdAt", ""),
        "status": status_info(record.get("status"), locale).to_dict(),
    }
