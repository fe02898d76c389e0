# app/actions.py
"""Invoice mutations and sign-in, as called by form submissions.

Expected failures come back as values: field errors as an ``InvoiceState``
with ``errors``, store failures as an ``InvoiceState`` carrying only a generic
message. Create and update return None on success and signal navigation to
the invoice listing instead.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional
from uuid import uuid4

from .auth import CREDENTIALS_STRATEGY, CredentialVerifier
from .errors import AuthError, CredentialsSignin
from .invoice_store import (
    StatementExecutor,
    delete_invoice_statement,
    insert_invoice_statement,
    update_invoice_statement,
)
from .revalidation import PathRevalidator
from .schemas import InvoiceState
from .validation import check_invoice_form, parse_invoice_form

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"

SOMETHING_WENT_WRONG = "Something went wrong"
DELETED_MESSAGE = "Deleted Invoice."
INVALID_CREDENTIALS = "Invalid credentials."
SIGN_IN_FAILED = "Something went wrong."


async def create_invoice(
    executor: StatementExecutor,
    revalidator: PathRevalidator,
    prior_state: Optional[InvoiceState] = None,
    form_data: Optional[Mapping[str, Any]] = None,
    *,
    invoices_path: str = INVOICES_PATH,
) -> Optional[InvoiceState]:
    try:
        validation_error = check_invoice_form(form_data)
        if validation_error is not None:
            return validation_error

        invoice = parse_invoice_form(form_data)
        invoice_id = str(uuid4())
        statement = insert_invoice_statement(invoice_id, invoice, date.today().isoformat())
        await executor.execute(statement)
    except Exception:
        logger.exception("Failed to create invoice")
        return InvoiceState(message=SOMETHING_WENT_WRONG)

    logger.info("Created invoice %s (%s cents, %s)", invoice_id, invoice.amount_in_cents, invoice.status)
    revalidator.revalidate(invoices_path, navigate=True)
    return None


async def update_invoice(
    executor: StatementExecutor,
    revalidator: PathRevalidator,
    invoice_id: str,
    prior_state: Optional[InvoiceState] = None,
    form_data: Optional[Mapping[str, Any]] = None,
    *,
    invoices_path: str = INVOICES_PATH,
) -> Optional[InvoiceState]:
    # no existence check: an unknown id is a silent no-op at the store
    try:
        validation_error = check_invoice_form(form_data)
        if validation_error is not None:
            return validation_error

        invoice = parse_invoice_form(form_data)
        await executor.execute(update_invoice_statement(invoice_id, invoice))
    except Exception:
        logger.exception("Failed to update invoice %s", invoice_id)
        return InvoiceState(message=SOMETHING_WENT_WRONG)

    logger.info("Updated invoice %s", invoice_id)
    revalidator.revalidate(invoices_path, navigate=True)
    return None


async def delete_invoice(
    executor: StatementExecutor,
    revalidator: PathRevalidator,
    invoice_id: str,
    *,
    invoices_path: str = INVOICES_PATH,
) -> InvoiceState:
    try:
        await executor.execute(delete_invoice_statement(invoice_id))
        revalidator.revalidate(invoices_path)
        logger.info("Deleted invoice %s", invoice_id)
        return InvoiceState(message=DELETED_MESSAGE)
    except Exception:
        logger.exception("Failed to delete invoice %s", invoice_id)
        return InvoiceState(message=SOMETHING_WENT_WRONG)


async def authenticate(
    verifier: CredentialVerifier,
    prior_message: Optional[str],
    credentials: Mapping[str, Any],
) -> Optional[str]:
    try:
        await verifier.sign_in(CREDENTIALS_STRATEGY, credentials)
    except AuthError as error:
        logger.warning("Sign-in rejected (%s)", error.type)
        if isinstance(error, CredentialsSignin):
            return INVALID_CREDENTIALS
        return SIGN_IN_FAILED
    return None


__all__ = [
    "INVOICES_PATH",
    "create_invoice",
    "update_invoice",
    "delete_invoice",
    "authenticate",
]
