"""Quote Intake -- Streamlit page.

Bilingual quote request form: the client picks a category and case type
(and, for family cases, whether they are inside or outside the U.S.),
answers the questions for that branch, leaves contact details and receives
a request number. Questions appear and disappear as answers change. The
sidebar looks up the status of an earlier request by its number.
"""

from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path

import streamlit as st

from app import audit_log
from app.branch_selector import load_catalog, resolve_classification
from app.case_types import active_case_types, category_label, group_by_category
from app.config import get_settings
from app.errors import SubmissionError, ValidationError
from app.flow_definitions import CASE_TYPES, LOCATION_SPLIT_CASE_TYPES
from app.request_status import status_info
from app.schema import DATE, LONG_TEXT, MULTI_CHOICE, SINGLE_CHOICE, CaseType, FieldDefinition, localize
from app.session import HANDED_OFF, SELECTING, IntakeSession
from app.submission import is_request_number, normalize_request_number
from app.submission_client import (
    ContactDetails,
    fetch_case_types,
    get_legal_request,
    make_submit_fn,
    send_confirmation,
)
from app.translations import t
from app.validator import validate_contact

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))
from shared.theme import render_field_error, render_nav_bar, render_theme_css

logger = logging.getLogger(__name__)

# -- Page config --------------------------------------------------------------

st.set_page_config(page_title="LinkToLawyers -- Free Quote", layout="centered")
render_theme_css()


@st.cache_data(ttl=3600)
def _get_case_types() -> list[CaseType]:
    try:
        return fetch_case_types()
    except SubmissionError as exc:
        logger.warning("Case types unavailable, using built-in list: %s", exc)
        return active_case_types(CASE_TYPES)


@st.cache_resource
def _get_catalog():
    return load_catalog(_get_case_types())


# -- Session state --------------------------------------------------------------

_LANGUAGES = {"English": "en", "Español": "es"}

with st.sidebar:
    language = st.radio("Language / Idioma", list(_LANGUAGES), horizontal=True, key="language")
locale = _LANGUAGES[language]

# -- Tracking ---------------------------------------------------------------------

# Streamlit markdown has no yellow
_BADGE_COLORS = {"yellow": "orange"}

with st.sidebar:
    st.markdown(f"#### {t('track_heading', locale)}")
    typed_number = st.text_input(t("track_prompt", locale), key="track_number")
    if st.button(t("track_button", locale), key="track_button") and typed_number:
        number = normalize_request_number(typed_number)
        if not is_request_number(number):
            st.warning(t("track_invalid", locale))
        else:
            try:
                record = get_legal_request(number)
            except SubmissionError as exc:
                logger.warning("Tracking lookup for %s failed: %s", number, exc)
                st.error(t("track_failed", locale))
            else:
                if record is None:
                    st.warning(t("track_not_found", locale, number=number))
                else:
                    info = status_info(record.get("status"), locale)
                    st.markdown(f"**{number}**: :{_BADGE_COLORS.get(info.color, info.color)}[{info.label}]")
                    st.caption(info.description)

if "intake" not in st.session_state:
    st.session_state.intake = IntakeSession(_get_catalog(), locale=locale)
    st.session_state.contact_errors = {}
    st.session_state.handoff = None

session: IntakeSession = st.session_state.intake
session.locale = locale


def _start_over() -> None:
    for key in list(st.session_state.keys()):
        if key.startswith(("field_", "contact_", "case_type", "location")):
            del st.session_state[key]
    st.session_state.intake = IntakeSession(_get_catalog(), locale=locale)
    st.session_state.contact_errors = {}
    st.session_state.handoff = None


render_nav_bar(t("page_title", locale))

# -- Success screen -------------------------------------------------------------

if session.status == HANDED_OFF:
    handoff = st.session_state.handoff
    st.subheader(t("success_title", locale))
    number = handoff["requestNumber"] if handoff else session.request_number
    st.markdown(f'<div class="request-number">{number}</div>', unsafe_allow_html=True)
    st.write(t("success_body", locale, request_number=number))
    if st.button(t("cancel", locale)):
        _start_over()
        st.rerun()
    st.stop()

# -- Case type ------------------------------------------------------------------

groups = group_by_category(_get_case_types())
categories = [category for category, _ in groups]
case_types_by_category = dict(groups)

category = st.selectbox(
    t("category_prompt", locale),
    categories,
    index=0 if len(categories) == 1 else None,
    format_func=lambda c: category_label(c, locale),
    key="case_type_category",
)

case_type = None
if category:
    choices = case_types_by_category[category]
    option_labels = {ct.value: localize(ct.label, locale) or ct.value for ct in choices}
    case_type = st.selectbox(
        t("case_type_prompt", locale),
        list(option_labels),
        index=0 if len(choices) == 1 else None,
        format_func=lambda v: option_labels.get(v, v),
        key=f"case_type_{category}",
    )

location = None
if case_type in LOCATION_SPLIT_CASE_TYPES:
    location = st.radio(
        t("location_prompt", locale),
        ["inside", "outside"],
        index=None,
        format_func=lambda v: t(f"location_{v}", locale),
        key="location",
    )

ready = bool(case_type) and (case_type not in LOCATION_SPLIT_CASE_TYPES or bool(location))
if ready:
    classification = resolve_classification(case_type, location)
    target = _get_catalog().select(classification)
    if session.branch is None or session.branch.id != target.id:
        session.select_branch(classification)
        audit_log.log_action("branch_selected", branch_id=target.id)

if not ready or session.status == SELECTING:
    st.stop()

# -- Questions ------------------------------------------------------------------


def _render_field(field_def: FieldDefinition):
    """Draw one widget and return its current raw value."""
    label = localize(field_def.label, locale) + (" *" if field_def.required else "")
    help_text = localize(field_def.help_text, locale) or None
    key = f"field_{session.branch.id}_{field_def.key}"
    current = session.state.answers.get(field_def.key)

    if field_def.kind == SINGLE_CHOICE:
        values = field_def.option_values
        return st.radio(
            label,
            values,
            index=values.index(current) if current in values else None,
            format_func=lambda v: field_def.option_label(v, locale),
            help=help_text,
            key=key,
        )
    if field_def.kind == MULTI_CHOICE:
        return st.multiselect(
            label,
            field_def.option_values,
            default=current or [],
            format_func=lambda v: field_def.option_label(v, locale),
            help=help_text,
            key=key,
        )
    if field_def.kind == DATE:
        picked = st.date_input(
            label,
            value=date.fromisoformat(current) if current else None,
            min_value=date(1940, 1, 1),
            help=help_text,
            key=key,
        )
        return picked.isoformat() if picked else None
    if field_def.kind == LONG_TEXT:
        return st.text_area(
            label,
            value=current or "",
            placeholder=localize(field_def.placeholder, locale) or None,
            help=help_text,
            key=key,
        )
    return st.text_input(
        label,
        value=current or "",
        placeholder=localize(field_def.placeholder, locale) or None,
        help=help_text,
        key=key,
    )


st.markdown(f"#### {localize(session.branch.label, locale)}")

changed = False
for field_def in session.get_visible_fields():
    value = _render_field(field_def)
    stored = session.state.answers.get(field_def.key)
    if (value or None) != stored:
        session.set_answer(field_def.key, value)
        changed = True
    error = session.state.errors.get(field_def.key)
    if error:
        render_field_error(error)

if changed:
    # Visibility may have changed; redraw with the new field set
    st.rerun()

# -- Contact details --------------------------------------------------------------

st.divider()
st.markdown(f"#### {t('contact_heading', locale)}")
contact_errors = st.session_state.contact_errors

col_first, col_last = st.columns(2)
with col_first:
    first_name = st.text_input(t("first_name", locale) + " *", key="contact_first_name")
    if "firstName" in contact_errors:
        render_field_error(contact_errors["firstName"])
with col_last:
    last_name = st.text_input(t("last_name", locale) + " *", key="contact_last_name")
    if "lastName" in contact_errors:
        render_field_error(contact_errors["lastName"])

email = st.text_input(t("email", locale) + " *", key="contact_email")
if "email" in contact_errors:
    render_field_error(contact_errors["email"])
phone = st.text_input(t("phone", locale), key="contact_phone")
city = st.text_input(t("location", locale), key="contact_location")
agree = st.checkbox(t("agree_terms", locale), key="contact_agree")
if "agreeToTerms" in contact_errors:
    render_field_error(contact_errors["agreeToTerms"])

# -- Submit -----------------------------------------------------------------------

submit_col, cancel_col = st.columns(2)
with cancel_col:
    if st.button(t("cancel", locale), use_container_width=True):
        cancelled_branch = session.branch.id
        session.cancel()
        audit_log.log_action("cancelled", branch_id=cancelled_branch)
        _start_over()
        st.rerun()

with submit_col:
    submit_clicked = st.button(t("submit", locale), type="primary", use_container_width=True)

if submit_clicked:
    contact = ContactDetails(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone_number=phone,
        location=city,
        agree_to_terms=agree,
    )
    st.session_state.contact_errors = validate_contact(contact, locale)
    if st.session_state.contact_errors:
        session.validate()
        st.error(t("errors_found", locale))
        st.rerun()

    branch = session.branch
    session.submit_fn = make_submit_fn(contact, branch)
    try:
        handoff = session.submit()
    except ValidationError:
        audit_log.log_action("submit_rejected", branch_id=branch.id)
        st.error(t("errors_found", locale))
        st.rerun()
    except SubmissionError as exc:
        audit_log.log_action(
            "submit_failed", branch_id=branch.id,
            request_number=session.request_number or "", details={"error": str(exc)},
        )
        st.error(t("submit_failed", locale))
    else:
        number = (handoff.response or {}).get("requestNumber") or handoff.payload.request_number
        audit_log.log_action("handed_off", branch_id=branch.id, request_number=number)
        if get_settings().send_confirmation:
            try:
                send_confirmation(number, locale)
            except SubmissionError as exc:
                logger.warning("Confirmation email for %s failed: %s", number, exc)
        st.session_state.handoff = {"requestNumber": number}
        st.rerun()
