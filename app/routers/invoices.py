from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from ..actions import create_invoice, delete_invoice, update_invoice
from ..config import settings
from ..invoice_store import list_invoices
from ..revalidation import ResponseRevalidator
from ..schemas import InvoiceRead, InvoiceState
from . import deps

router = APIRouter(prefix=settings.INVOICES_PATH, tags=["invoices"])

REVALIDATED_HEADER = "X-Revalidated-Paths"


def _with_revalidation(response: Response, revalidator: ResponseRevalidator) -> Response:
    paths = revalidator.header_value()
    if paths:
        response.headers[REVALIDATED_HEADER] = paths
    return response


def _form_response(state: Optional[InvoiceState], revalidator: ResponseRevalidator) -> Response:
    if state is None:
        target = revalidator.redirect_to or settings.INVOICES_PATH
        return _with_revalidation(RedirectResponse(target, status_code=303), revalidator)
    status_code = 422 if state.errors else 500
    return JSONResponse(state.to_payload(), status_code=status_code)


@router.get("", response_model=list[InvoiceRead])
async def list_invoices_route(supabase=Depends(deps.get_supabase)):
    records = await list_invoices(supabase)
    return [InvoiceRead.model_validate(rec) for rec in records]


@router.post("/create")
async def create_invoice_route(
    request: Request,
    executor=Depends(deps.get_executor),
    revalidator: ResponseRevalidator = Depends(deps.get_revalidator),
):
    form = await request.form()
    state = await create_invoice(
        executor, revalidator, None, form, invoices_path=settings.INVOICES_PATH
    )
    return _form_response(state, revalidator)


@router.post("/{invoice_id}/edit")
async def update_invoice_route(
    invoice_id: str,
    request: Request,
    executor=Depends(deps.get_executor),
    revalidator: ResponseRevalidator = Depends(deps.get_revalidator),
):
    form = await request.form()
    state = await update_invoice(
        executor, revalidator, invoice_id, None, form, invoices_path=settings.INVOICES_PATH
    )
    return _form_response(state, revalidator)


@router.post("/{invoice_id}/delete")
async def delete_invoice_route(
    invoice_id: str,
    executor=Depends(deps.get_executor),
    revalidator: ResponseRevalidator = Depends(deps.get_revalidator),
):
    state = await delete_invoice(
        executor, revalidator, invoice_id, invoices_path=settings.INVOICES_PATH
    )
    status_code = 200 if revalidator.stale_paths else 500
    return _with_revalidation(JSONResponse(state.to_payload(), status_code=status_code), revalidator)
