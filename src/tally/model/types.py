from __future__ import annotations

"""
Closed domain enumerations: transaction direction, category, budget status.

Values are stable machine keys used for serialization. Display labels are
the strings the ledger has always shown to users (and that older files stored
verbatim), so label lookup doubles as the legacy deserialization path.
"""

from enum import StrEnum

from tally.model.errors import UnknownCategoryError, UnknownDirectionError


def _fold(text: str) -> str:
    return text.strip().casefold()


class TransactionDirection(StrEnum):
    """Whether a transaction decreases (debit) or increases (credit) a balance."""

    DEBIT = "debit"
    CREDIT = "credit"

    @property
    def label(self) -> str:
        return _DIRECTION_LABELS[self]

    def reverse(self) -> TransactionDirection:
        """Opposite direction, used to undo a balance effect."""
        if self is TransactionDirection.DEBIT:
            return TransactionDirection.CREDIT
        return TransactionDirection.DEBIT

    @classmethod
    def from_label(cls, text: str) -> TransactionDirection:
        """Resolve a display label, machine value or member name (case-insensitive).

        Raises:
            UnknownDirectionError: if nothing matches
        """
        key = _fold(text or "")
        for member in cls:
            if key in (_fold(member.label), member.value, member.name.casefold()):
                return member
        raise UnknownDirectionError(text)


_DIRECTION_LABELS = {
    TransactionDirection.DEBIT: "Débit",
    TransactionDirection.CREDIT: "Crédit",
}


class TransactionCategory(StrEnum):
    """Budget-relevant classification tag on a transaction."""

    GENERAL = "general"
    FOOD = "food"
    TRANSPORT = "transport"
    LEISURE = "leisure"
    SALARY = "salary"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @property
    def is_budgetable(self) -> bool:
        # Salary is income; it never gets a spending ceiling.
        return self is not TransactionCategory.SALARY

    @classmethod
    def budgetable(cls) -> list[TransactionCategory]:
        return [c for c in cls if c.is_budgetable]

    @classmethod
    def from_label(cls, text: str) -> TransactionCategory:
        """Resolve a display label, machine value or member name (case-insensitive).

        Raises:
            UnknownCategoryError: if nothing matches
        """
        key = _fold(text or "")
        for member in cls:
            if key in (_fold(member.label), member.value, member.name.casefold()):
                return member
        raise UnknownCategoryError(text)


_CATEGORY_LABELS = {
    TransactionCategory.GENERAL: "Général",
    TransactionCategory.FOOD: "Nourriture",
    TransactionCategory.TRANSPORT: "Transport",
    TransactionCategory.LEISURE: "Loisirs",
    TransactionCategory.SALARY: "Salaire",
    TransactionCategory.OTHER: "Autre",
}


class BudgetStatus(StrEnum):
    """Spend-vs-budget classification driving report highlighting."""

    OK = "ok"
    NEUTRAL = "neutral"
    EXCEEDED = "exceeded"


__all__ = [
    "BudgetStatus",
    "TransactionCategory",
    "TransactionDirection",
]
