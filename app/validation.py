# app/validation.py
"""Invoice form validation.

Raw submissions are untrusted: values may be missing, blank, of the wrong type
or out of range. ``check_invoice_form`` runs every field rule and collects the
failures per field; ``parse_invoice_form`` is the strict parse used once the
check has passed.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from .schemas import InvoiceForm, InvoiceState

logger = logging.getLogger(__name__)

FORM_FIELDS = ("customerId", "amount", "status")

FIELD_MESSAGES: Dict[str, str] = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}

MISSING_FIELDS_MESSAGE = "Missing Fields. Failed to Create Invoice."


def _first_value(form_data: Mapping[str, Any], name: str) -> Any:
    # multi-value forms (Starlette FormData) keep the first submitted value
    getlist = getattr(form_data, "getlist", None)
    if callable(getlist):
        values = getlist(name)
        return values[0] if values else None
    return form_data.get(name)


def _form_payload(form_data: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Pick the invoice fields out of the submission; ``id`` and ``date`` are never read."""
    if form_data is None:
        return {}
    payload: Dict[str, Any] = {}
    for name in FORM_FIELDS:
        value = _first_value(form_data, name)
        if value is not None:
            payload[name] = value
    return payload


def _field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else ""
        message = FIELD_MESSAGES.get(field)
        if message is None:
            continue
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors


def check_invoice_form(form_data: Optional[Mapping[str, Any]]) -> Optional[InvoiceState]:
    """Return the aggregated field errors for ``form_data``, or None when it is valid."""
    try:
        InvoiceForm.model_validate(_form_payload(form_data))
    except ValidationError as exc:
        errors = _field_errors(exc)
        logger.info("Invoice form rejected (fields=%s)", sorted(errors))
        return InvoiceState(errors=errors, message=MISSING_FIELDS_MESSAGE)
    return None


def parse_invoice_form(form_data: Optional[Mapping[str, Any]]) -> InvoiceForm:
    """Strictly parse ``form_data``; raises ``ValidationError`` if it does not conform."""
    return InvoiceForm.model_validate(_form_payload(form_data))


__all__ = [
    "FIELD_MESSAGES",
    "MISSING_FIELDS_MESSAGE",
    "check_invoice_form",
    "parse_invoice_form",
]
