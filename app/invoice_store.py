# app/invoice_store.py
"""Invoice persistence: statement values and the Supabase executor that runs them."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Protocol

from supabase import Client

from .schemas import InvoiceForm

logger = logging.getLogger(__name__)

INVOICES_TABLE = "invoices"

Operation = Literal["insert", "update", "delete"]


@dataclass(frozen=True)
class Statement:
    operation: Operation
    table: str
    values: Dict[str, Any] = field(default_factory=dict)
    match: Dict[str, Any] = field(default_factory=dict)


class StatementExecutor(Protocol):
    async def execute(self, statement: Statement) -> None: ...


def insert_invoice_statement(invoice_id: str, invoice: InvoiceForm, invoice_date: str) -> Statement:
    return Statement(
        operation="insert",
        table=INVOICES_TABLE,
        values={
            "id": invoice_id,
            "customer_id": invoice.customer_id,
            "amount": invoice.amount_in_cents,
            "status": invoice.status,
            "date": invoice_date,
        },
    )


def update_invoice_statement(invoice_id: str, invoice: InvoiceForm) -> Statement:
    # date and id are fixed at creation
    return Statement(
        operation="update",
        table=INVOICES_TABLE,
        values={
            "customer_id": invoice.customer_id,
            "amount": invoice.amount_in_cents,
            "status": invoice.status,
        },
        match={"id": invoice_id},
    )


def delete_invoice_statement(invoice_id: str) -> Statement:
    return Statement(operation="delete", table=INVOICES_TABLE, match={"id": invoice_id})


def _apply_match(query, match: Mapping[str, Any]):
    for column, value in match.items():
        query = query.eq(column, value)
    return query


def _execute_sync(supabase: Client, statement: Statement):
    table = supabase.table(statement.table)
    if statement.operation == "insert":
        return table.insert(statement.values).execute()
    if not statement.match:
        raise ValueError(f"{statement.operation} on {statement.table} requires a match filter")
    if statement.operation == "update":
        return _apply_match(table.update(statement.values), statement.match).execute()
    if statement.operation == "delete":
        return _apply_match(table.delete(), statement.match).execute()
    raise ValueError(f"Unsupported statement operation: {statement.operation}")


class SupabaseExecutor:
    """Runs statements through the Supabase table API off the event loop."""

    def __init__(self, supabase: Client):
        self._supabase = supabase

    async def execute(self, statement: Statement) -> None:
        logger.debug(
            "Executing %s on %s (match=%s)", statement.operation, statement.table, statement.match
        )
        await asyncio.to_thread(_execute_sync, self._supabase, statement)


def _list_invoices_sync(supabase: Client, limit: int):
    return (
        supabase
        .table(INVOICES_TABLE)
        .select("*")
        .order("date", desc=True)
        .limit(limit)
        .execute()
    )


async def list_invoices(supabase: Client, limit: int = 1000) -> list[Dict[str, Any]]:
    resp = await asyncio.to_thread(_list_invoices_sync, supabase, limit)
    return resp.data or []


__all__ = [
    "Statement",
    "StatementExecutor",
    "SupabaseExecutor",
    "insert_invoice_statement",
    "update_invoice_statement",
    "delete_invoice_statement",
    "list_invoices",
]
