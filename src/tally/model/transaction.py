from __future__ import annotations

"""
Transaction entity.

Scope
- Pure Pydantic v2 model; no I/O.
- Amount is always a strictly positive magnitude. The direction decides the
  sign of the balance effect, never the stored value.
- Identity (id) and creation date are fixed once created; the remaining
  fields are replaced in place by an edit.
"""

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from tally.model.types import TransactionCategory, TransactionDirection


class Transaction(BaseModel):
    """One recorded movement of money against a named account."""

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(gt=0, frozen=True)
    date: dt.date = Field(default_factory=dt.date.today, frozen=True)
    account: str
    direction: TransactionDirection
    category: TransactionCategory
    description: str
    amount: Decimal = Field(gt=0)

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value: Any) -> Decimal:
        """Parse amount from string or number without float artefacts."""
        if isinstance(value, float):
            return Decimal(str(value))
        return value

    @field_serializer("amount")
    def serialize_amount(self, value: Decimal) -> str:
        """Serialize Decimal to string to preserve precision."""
        return str(value)

    @property
    def signed_amount(self) -> Decimal:
        """Effect of this transaction on its account balance."""
        return signed_effect(self.direction, self.amount)


def signed_effect(direction: TransactionDirection, amount: Decimal) -> Decimal:
    """+amount for a credit, -amount for a debit."""
    if direction is TransactionDirection.CREDIT:
        return amount
    return -amount


__all__ = ["Transaction", "signed_effect"]
