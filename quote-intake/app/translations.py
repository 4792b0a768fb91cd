"""Localized UI and validation strings for the Quote Intake tool.

English is the fallback for any missing locale or key.
"""

from __future__ import annotations

DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES = ("en", "es")

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "required": "This field is required",
        "invalid_date": "Please enter a valid date (YYYY-MM-DD)",
        "invalid_choice": "Please choose one of the listed options",
        "invalid_format": "The format of this answer is not valid",
        "page_title": "Get Your Free Quote",
        "case_type_prompt": "What kind of immigration help do you need?",
        "location_prompt": "Are you inside the U.S. right now, or outside the U.S.?",
        "location_inside": "Inside the U.S.",
        "location_outside": "Outside the U.S.",
        "contact_heading": "Your contact information",
        "first_name": "First name",
        "last_name": "Last name",
        "email": "Email address",
        "phone": "Phone number",
        "location": "City and state",
        "agree_terms": "I agree to the terms and conditions",
        "submit": "Submit Request",
        "cancel": "Start over",
        "errors_found": "Please fix the highlighted answers and try again.",
        "submit_failed": "We could not submit your request. Please try again.",
        "success_title": "Your Quotes Are On The Way",
        "success_body": "Your request number is {request_number}. Keep it to track your quotes.",
        "invalid_email": "Please enter a valid email address",
        "terms_required": "You must agree to the terms to continue",
        "category_prompt": "Category",
        "track_heading": "Track your request",
        "track_prompt": "Request number (e.g. lr-123456)",
        "track_button": "Check status",
        "track_invalid": "Request numbers look like lr-123456",
        "track_not_found": "No request found with number {number}",
        "track_failed": "We could not look up your request right now. Please try again later.",
    },
    "es": {
        "required": "Este campo es obligatorio",
        "invalid_date": "Por favor ingresa una fecha válida (AAAA-MM-DD)",
        "invalid_choice": "Por favor elige una de las opciones",
        "invalid_format": "El formato de esta respuesta no es válido",
        "page_title": "Solicita Tu Cotización Gratuita",
        "case_type_prompt": "¿Qué tipo de ayuda de inmigración necesitas?",
        "location_prompt": "¿Estás dentro de los EE. UU. ahora mismo, o fuera de los EE. UU.?",
        "location_inside": "Dentro de los EE. UU.",
        "location_outside": "Fuera de los EE. UU.",
        "contact_heading": "Tu información de contacto",
        "first_name": "Nombre",
        "last_name": "Apellido",
        "email": "Correo electrónico",
        "phone": "Número de teléfono",
        "location": "Ciudad y estado",
        "agree_terms": "Acepto los términos y condiciones",
        "submit": "Enviar Solicitud",
        "cancel": "Empezar de nuevo",
        "errors_found": "Por favor corrige las respuestas marcadas e inténtalo de nuevo.",
        "submit_failed": "Hubo un error al enviar tu solicitud. Por favor, inténtalo de nuevo.",
        "success_title": "Tus Cotizaciones Están En Camino",
        "success_body": "Tu número de solicitud es {request_number}. Guárdalo para seguir tus cotizaciones.",
        "invalid_email": "Por favor ingresa un correo electrónico válido",
        "terms_required": "Debes aceptar los términos para continuar",
        "category_prompt": "Categoría",
        "track_heading": "Rastrea tu solicitud",
        "track_prompt": "Número de solicitud (ej. lr-123456)",
        "track_button": "Ver estado",
        "track_invalid": "Los números de solicitud tienen la forma lr-123456",
        "track_not_found": "No encontramos una solicitud con el número {number}",
        "track_failed": "No pudimos buscar tu solicitud en este momento. Por favor, inténtalo más tarde.",
    },
}


def normalize_locale(locale: str | None) -> str:
    """Map a locale like ``es-MX`` or ``ES`` to a supported code."""
    code = (locale or DEFAULT_LOCALE).split("-")[0].split("_")[0].lower()
    return code if code in SUPPORTED_LOCALES else DEFAULT_LOCALE


def t(key: str, locale: str = DEFAULT_LOCALE, **kwargs) -> str:
    """Look up a message, falling back to English, then to the key itself."""
    table = MESSAGES.get(normalize_locale(locale), MESSAGES[DEFAULT_LOCALE])
    text = table.get(key) or MESSAGES[DEFAULT_LOCALE].get(key, key)
    return text.format(**kwargs) if kwargs else text
