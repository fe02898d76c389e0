from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

InvoiceStatus = Literal["pending", "paid"]

CENT = Decimal("1")
# amount is stored as a Postgres integer count of cents
MAX_AMOUNT = Decimal("21474836.47")


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(CENT, rounding=ROUND_HALF_UP))


class InvoiceForm(BaseModel):
    """Validated invoice submission, keyed by the form's field names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    status: InvoiceStatus

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        # floats go through str() so 45.5 stays 45.5 and not its binary expansion
        if isinstance(value, float):
            return str(value)
        return value

    @field_validator("amount")
    @classmethod
    def _at_least_one_cent(cls, value: Decimal) -> Decimal:
        if to_cents(value) <= 0:
            raise ValueError("amount rounds to zero cents")
        return value

    @property
    def amount_in_cents(self) -> int:
        return to_cents(self.amount)


class InvoiceState(BaseModel):
    """Outcome reported back to the form: field errors and/or a message."""

    errors: Optional[Dict[str, List[str]]] = None
    message: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class InvoiceRead(BaseModel):
    id: str
    customer_id: str
    amount: int
    status: InvoiceStatus
    date: date

    model_config = ConfigDict(from_attributes=True)


class SignInCredentials(BaseModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6)
