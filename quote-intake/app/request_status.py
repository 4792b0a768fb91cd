"""Request status display for the tracking lookup.

Statuses are the server's string codes. Unknown codes are shown as-is in
gray, so a status added server-side never breaks the lookup.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_STATUS = "under_review"

# code -> (color, {"en": (label, description), "es": (label, description)})
STATUS_CODES: dict[str, tuple[str, dict[str, tuple[str, str]]]] = {
    "under_review": ("yellow", {
        "en": ("Under Review", "Your request is being reviewed by our team"),
        "es": ("En Revisión", "Nuestro equipo está revisando tu solicitud"),
    }),
    "attorney_matching": ("blue", {
        "en": ("Matching with Attorneys", "We are finding qualified attorneys for your case"),
        "es": ("Buscando Abogados", "Estamos buscando abogados calificados para tu caso"),
    }),
    "quotes_requested": ("blue", {
        "en": ("Quotes Requested", "Attorneys have been asked to provide quotes"),
        "es": ("Cotizaciones Solicitadas", "Se ha pedido a los abogados que envíen cotizaciones"),
    }),
    "quotes_received": ("green", {
        "en": ("Quotes Available", "You have received quotes from attorneys"),
        "es": ("Cotizaciones Disponibles", "Has recibido cotizaciones de abogados"),
    }),
    "awaiting_client_response": ("orange", {
        "en": ("Awaiting Client Response", "Waiting for your response to the quotes"),
        "es": ("Esperando tu Respuesta", "Esperamos tu respuesta a las cotizaciones"),
    }),
    "client_reviewing": ("orange", {
        "en": ("Client Reviewing Options", "You are reviewing the attorney options"),
        "es": ("Revisando Opciones", "Estás revisando las opciones de abogados"),
    }),
    "attorney_selected": ("green", {
        "en": ("Attorney Selected", "You have selected an attorney"),
        "es": ("Abogado Seleccionado", "Has seleccionado un abogado"),
    }),
    "case_assigned": ("green", {
        "en": ("Case Assigned", "Your case has been assigned to an attorney"),
        "es": ("Caso Asignado", "Tu caso ha sido asignado a un abogado"),
    }),
    "completed": ("green", {
        "en": ("Completed", "Your request has been completed"),
        "es": ("Completado", "Tu solicitud ha sido completada"),
    }),
    "on_hold": ("gray", {
        "en": ("On Hold", "Your request is temporarily on hold"),
        "es": ("En Espera", "Tu solicitud está temporalmente en espera"),
    }),
    "cancelled": ("red", {
        "en": ("Cancelled", "Your request has been cancelled"),
        "es": ("Cancelado", "Tu solicitud ha sido cancelada"),
    }),
    "expired": ("red", {
        "en": ("Expired", "Your request has expired"),
        "es": ("Vencido", "Tu solicitud ha vencido"),
    }),
}


@dataclass
class StatusInfo:
    code: str
    label: str
    description: str
    color: str

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "label": self.label,
            "description": self.description,
            "color": self.color,
        }


def status_info(status: str | None, locale: str = "en") -> StatusInfo:
    """Label, description and badge color for *status* in *locale*.

    A missing status means the request has not been picked up yet.
    """
    code = status or DEFAULT_STATUS
    entry = STATUS_CODES.get(code)
    if entry is None:
        unknown = "Estado desconocido" if locale == "es" else "Status unknown"
        return StatusInfo(code=code, label=code, description=unknown, color="gray")
    color, texts = entry
    label, description = texts.get(locale, texts["en"])
    return StatusInfo(code=code, label=label, description=description, color=color)
