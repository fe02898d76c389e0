"""Shared fixtures for the invoice actions test suite."""

import os

os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")

from typing import List, Optional  # noqa: E402

import pytest  # noqa: E402

from app.invoice_store import Statement  # noqa: E402
from app.revalidation import ResponseRevalidator  # noqa: E402


class FakeExecutor:
    """Records statements; raises ``error`` instead when one is set."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.statements: List[Statement] = []

    async def execute(self, statement: Statement) -> None:
        if self.error is not None:
            raise self.error
        self.statements.append(statement)


class FakeVerifier:
    def __init__(self, error: Optional[Exception] = None, session: Optional[dict] = None) -> None:
        self.error = error
        self.session = session
        self.calls: list = []

    async def sign_in(self, strategy, credentials) -> None:
        self.calls.append((strategy, dict(credentials)))
        if self.error is not None:
            raise self.error


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def failing_executor() -> FakeExecutor:
    return FakeExecutor(error=ConnectionError("connection refused by db host 10.0.0.5"))


@pytest.fixture
def revalidator() -> ResponseRevalidator:
    return ResponseRevalidator()


@pytest.fixture
def valid_form() -> dict:
    return {"customerId": "c1", "amount": "10", "status": "pending"}
