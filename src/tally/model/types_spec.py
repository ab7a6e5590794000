from __future__ import annotations

import pytest

from tally.model.errors import UnknownCategoryError, UnknownDirectionError
from tally.model.types import TransactionCategory, TransactionDirection


class DescribeTransactionDirection:
    def it_should_reverse_debit_and_credit(self):
        assert TransactionDirection.DEBIT.reverse() is TransactionDirection.CREDIT
        assert TransactionDirection.CREDIT.reverse() is TransactionDirection.DEBIT

    def it_should_expose_display_labels(self):
        assert TransactionDirection.DEBIT.label == "Débit"
        assert TransactionDirection.CREDIT.label == "Crédit"

    @pytest.mark.parametrize("text", ["Débit", "débit", " DÉBIT ", "debit", "DEBIT"])
    def it_should_look_up_by_label_value_or_name(self, text):
        assert TransactionDirection.from_label(text) is TransactionDirection.DEBIT

    def it_should_fail_on_unknown_label(self):
        with pytest.raises(UnknownDirectionError) as exc:
            TransactionDirection.from_label("Sideways")
        assert exc.value.label == "Sideways"


class DescribeTransactionCategory:
    def it_should_resolve_legacy_french_labels(self):
        assert TransactionCategory.from_label("Nourriture") is TransactionCategory.FOOD
        assert TransactionCategory.from_label("loisirs") is TransactionCategory.LEISURE
        assert TransactionCategory.from_label("GÉNÉRAL") is TransactionCategory.GENERAL

    def it_should_resolve_machine_values(self):
        assert TransactionCategory.from_label("food") is TransactionCategory.FOOD
        assert TransactionCategory.from_label("Salary") is TransactionCategory.SALARY

    def it_should_fail_on_unknown_label(self):
        with pytest.raises(UnknownCategoryError):
            TransactionCategory.from_label("INVALIDCATEGORY")

    def it_should_exclude_salary_from_budgetable_categories(self):
        budgetable = TransactionCategory.budgetable()
        assert TransactionCategory.SALARY not in budgetable
        assert len(budgetable) == len(TransactionCategory) - 1

    def it_should_serialize_as_stable_value(self):
        assert str(TransactionCategory.TRANSPORT) == "transport"
