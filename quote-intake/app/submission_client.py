"""HTTP client for the legal-request and case-type endpoints.

Posts compiled payloads to ``/api/legal-requests`` and triggers the
confirmation email afterwards. The endpoint replies with
``{"success": bool, "data": {...}, "error": str}``; anything other than a
2xx reply with ``success: true`` raises SubmissionError. There is no retry
here: callers decide whether to try again. Tracking lookups
(``GET /api/legal-requests/{number}``) return None for an unknown number.

Settings come from app.config (``QUOTE_INTAKE_API_BASE_URL`` etc.).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import requests

from app.case_types import active_case_types
from app.config import Settings, get_settings
from app.errors import SubmissionError
from app.schema import Branch, CaseType, SubmissionPayload
from app.submission import describe_answers

logger = logging.getLogger(__name__)


@dataclass
class ContactDetails:
    """Who the attorneys should reply to."""

    first_name: str
    last_name: str
    email: str
    phone_number: str = ""
    location: str = ""
    agree_to_terms: bool = False


def build_request_body(payload: SubmissionPayload, contact: ContactDetails, branch: Branch) -> dict:
    """Merge the payload with contact details into the legal-request body."""
    body = payload.to_dict()
    body.update({
        "firstName": contact.first_name.strip(),
        "lastName": contact.last_name.strip(),
        "email": contact.email.strip(),
        "phoneNumber": contact.phone_number.strip(),
        "location": contact.location.strip(),
        "agreeToTerms": contact.agree_to_terms,
        "caseType": payload.branch_id,
        "caseDescription": describe_answers(branch, payload.answers, payload.locale),
    })
    return body


def _check(resp: requests.Response, url: str) -> dict:
    try:
        data = resp.json()
    except ValueError:
        data = {}

    if not resp.ok:
        error = data.get("error") if isinstance(data, dict) else None
        raise SubmissionError(error or f"HTTP {resp.status_code} from {url}", status_code=resp.status_code)
    if not isinstance(data, dict) or not data.get("success"):
        error = data.get("error") if isinstance(data, dict) else None
        raise SubmissionError(error or "Request was not accepted", status_code=resp.status_code)
    return data


def _post(url: str, body: dict, settings: Settings) -> dict:
    try:
        resp = requests.post(url, json=body, timeout=settings.request_timeout)
    except requests.RequestException as exc:
        raise SubmissionError(f"Could not reach {url}: {exc}") from exc
    return _check(resp, url)


def _get(url: str, settings: Settings) -> requests.Response:
    try:
        return requests.get(url, timeout=settings.request_timeout)
    except requests.RequestException as exc:
        raise SubmissionError(f"Could not reach {url}: {exc}") from exc


def post_legal_request(
    payload: SubmissionPayload,
    contact: ContactDetails,
    branch: Branch,
    settings: Settings | None = None,
) -> dict:
    """Create the legal request. Returns the endpoint's ``data`` object."""
    settings = settings or get_settings()
    url = f"{settings.api_base_url.rstrip('/')}/api/legal-requests"
    body = build_request_body(payload, contact, branch)
    logger.info("Submitting %s (%s)", payload.request_number, payload.branch_id)
    data = _post(url, body, settings)
    result = data.get("data")
    if result is None:
        result = {}
    if not isinstance(result, dict):
        raise SubmissionError(
            f"Unexpected response from {url}: 'data' is {type(result).__name__}",
            status_code=200,
        )
    if not result.get("requestNumber"):
        result = {**result, "requestNumber": payload.request_number}
    return result


def fetch_case_types(settings: Settings | None = None) -> list[CaseType]:
    """Load the case-type picker from ``/api/case-types``.

    Returns active case types in display order. A malformed reply raises
    SubmissionError; callers fall back to the built-in list.
    """
    settings = settings or get_settings()
    url = f"{settings.api_base_url.rstrip('/')}/api/case-types"
    data = _check(_get(url, settings), url)
    items = data.get("data")
    if not isinstance(items, list):
        raise SubmissionError(f"Unexpected response from {url}: 'data' is not a list")
    try:
        case_types = [CaseType.from_api(item) for item in items]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise SubmissionError(f"Malformed case type from {url}: {exc}") from exc
    logger.info("Loaded %d case types from %s", len(case_types), url)
    return active_case_types(case_types)


def get_legal_request(request_number: str, settings: Settings | None = None) -> dict | None:
    """Look up a submitted request for tracking.

    Returns the request record (``status`` defaults to ``under_review``), or
    None when the server does not know the number.
    """
    settings = settings or get_settings()
    url = f"{settings.api_base_url.rstrip('/')}/api/legal-requests/{request_number}"
    resp = _get(url, settings)
    if resp.status_code == 404:
        return None
    data = _check(resp, url)
    record = data.get("data")
    if not isinstance(record, dict):
        raise SubmissionError(f"Unexpected response from {url}: 'data' is not an object")
    return {**record, "status": record.get("status") or "under_review"}


def send_confirmation(request_number: str, locale: str = "en", settings: Settings | None = None) -> dict:
    """Ask the server to email the confirmation for *request_number*.

    Spanish requests use the Spanish template endpoint.
    """
    settings = settings or get_settings()
    suffix = "send-confirmation-spanish" if locale == "es" else "send-confirmation"
    url = f"{settings.api_base_url.rstrip('/')}/api/legal-requests/{request_number}/{suffix}"
    return _post(url, {}, settings)


def make_submit_fn(
    contact: ContactDetails,
    branch: Branch,
    settings: Settings | None = None,
) -> Callable[[SubmissionPayload], dict]:
    """Bind contact details into a ``submit_fn`` for IntakeSession."""

    def _submit(payload: SubmissionPayload) -> dict:
        return post_legal_request(payload, contact, branch, settings)

    return _submit
