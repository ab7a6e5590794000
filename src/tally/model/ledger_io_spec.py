from __future__ import annotations

"""Tests for ledger text formats, schema migration and CSV export."""

import csv
import io
import json
import logging
from datetime import date
from decimal import Decimal

import pytest

from tally.model.ledger_io import (
    budgets_from,
    dump_export_csv,
    dump_state_json,
    dump_transactions_json,
    load_legacy_balances,
    load_legacy_transactions_csv,
    load_state_json,
    load_transactions_json,
    transaction_from_record,
)
from tally.model.transaction import Transaction
from tally.model.types import TransactionCategory, TransactionDirection


@pytest.fixture
def sample_transactions():
    return [
        Transaction(
            id=1,
            date=date(2025, 1, 5),
            account="Bank",
            direction=TransactionDirection.CREDIT,
            category=TransactionCategory.SALARY,
            description="Paycheck",
            amount=Decimal("1000.00"),
        ),
        Transaction(
            id=4,
            date=date(2025, 1, 7),
            account="Cash",
            direction=TransactionDirection.DEBIT,
            category=TransactionCategory.FOOD,
            description='Lunch at "Chez Paul", downtown',
            amount=Decimal("18.4"),
        ),
    ]


class DescribeTransactionsBlob:
    def it_should_restore_every_field(self, sample_transactions):
        text = dump_transactions_json(sample_transactions)
        assert load_transactions_json(text) == sample_transactions

    def it_should_write_schema_version_and_machine_values(self, sample_transactions):
        doc = json.loads(dump_transactions_json(sample_transactions))
        assert doc["schema_version"] == 2
        assert doc["transactions"][0]["direction"] == "credit"
        assert doc["transactions"][1]["amount"] == "18.4"

    def it_should_read_schema_1_bare_list_with_labels(self):
        text = json.dumps(
            [
                {
                    "id": 7,
                    "date": "2024-12-31",
                    "account": "Cash",
                    "type": "Débit",
                    "category": "Nourriture",
                    "description": "Bakery",
                    "montant": 3.2,
                }
            ]
        )
        [txn] = load_transactions_json(text)
        assert txn.id == 7
        assert txn.direction is TransactionDirection.DEBIT
        assert txn.category is TransactionCategory.FOOD
        assert txn.amount == Decimal("3.2")

    def it_should_recover_unknown_labels_with_a_warning(self, caplog):
        record = {
            "id": 2,
            "date": "2025-02-01",
            "account": "Bank",
            "direction": "Sideways",
            "category": "Gadgets",
            "description": "Thing",
            "amount": "9",
        }
        with caplog.at_level(logging.WARNING):
            txn = transaction_from_record(record)
        assert txn.direction is TransactionDirection.DEBIT
        assert txn.category is TransactionCategory.OTHER
        assert "Gadgets" in caplog.text
        assert "Sideways" in caplog.text

    def it_should_skip_malformed_records_and_duplicate_ids(self, caplog):
        doc = {
            "schema_version": 2,
            "transactions": [
                {"id": 1, "date": "2025-01-01", "account": "Cash", "direction": "debit",
                 "category": "food", "description": "ok", "amount": "1"},
                {"id": 2, "date": "not a date", "account": "Cash", "direction": "debit",
                 "category": "food", "description": "bad date", "amount": "1"},
                {"id": 3, "date": "2025-01-01", "account": "Cash", "direction": "debit",
                 "category": "food", "description": "zero", "amount": "0"},
                {"id": 1, "date": "2025-01-02", "account": "Cash", "direction": "debit",
                 "category": "food", "description": "dupe", "amount": "2"},
                "garbage",
            ],
        }
        with caplog.at_level(logging.WARNING):
            result = load_transactions_json(json.dumps(doc))
        assert [t.description for t in result] == ["ok"]
        assert caplog.text.count("Skipping") == 4

    def it_should_raise_on_unparseable_text(self):
        with pytest.raises(ValueError):
            load_transactions_json("{not json")
        with pytest.raises(ValueError):
            load_transactions_json('{"schema_version": 2}')
        with pytest.raises(ValueError):
            load_transactions_json('"just a string"')


class DescribeStateBlob:
    def it_should_restore_balances_and_budgets(self):
        balances = {"Cash": Decimal("-12.50"), "Bank": Decimal("1000")}
        budgets = {TransactionCategory.FOOD: Decimal("300"), TransactionCategory.OTHER: Decimal("0")}
        state = load_state_json(dump_state_json(balances, budgets))
        assert state.balances == balances
        assert state.budgets == budgets
        assert state.schema_version == 2

    def it_should_bucket_unknown_legacy_budget_keys_into_other(self, caplog):
        text = json.dumps(
            {"balances": {"Cash": 0}, "budgets": {"Nourriture": 250, "INVALIDCATEGORY": 40}}
        )
        with caplog.at_level(logging.WARNING):
            state = load_state_json(text)
        assert state.schema_version == 1
        assert state.budgets == {
            TransactionCategory.FOOD: Decimal("250"),
            TransactionCategory.OTHER: Decimal("40"),
        }
        assert "INVALIDCATEGORY" in caplog.text

    def it_should_drop_salary_and_negative_budgets(self):
        budgets = budgets_from({"Salaire": 100, "transport": -5, "leisure": "60"})
        assert budgets == {TransactionCategory.LEISURE: Decimal("60")}

    def it_should_skip_unparseable_balances(self):
        state = load_state_json(json.dumps({"balances": {"Cash": "abc", "Bank": "5"}}))
        assert state.balances == {"Bank": Decimal("5")}
        assert state.budgets == {}

    def it_should_raise_when_balances_are_missing(self):
        with pytest.raises(ValueError):
            load_state_json(json.dumps({"schema_version": 2, "budgets": {}}))


class DescribeExportCsv:
    def it_should_write_quoted_header_and_rows(self, sample_transactions):
        text = dump_export_csv(sample_transactions)
        lines = text.splitlines()
        assert lines[0] == '"ID","Date","Account","Type","Category","Description","Amount"'
        assert lines[1] == '"1","05/01/2025","Bank","Crédit","Salaire","Paycheck","1000.00"'

    def it_should_double_embedded_quotes(self, sample_transactions):
        text = dump_export_csv(sample_transactions)
        assert '"Lunch at ""Chez Paul"", downtown"' in text

    def it_should_parse_back_with_a_standard_csv_reader(self, sample_transactions):
        rows = list(csv.reader(io.StringIO(dump_export_csv(sample_transactions))))
        assert len(rows) == 3
        assert rows[2][5] == 'Lunch at "Chez Paul", downtown'

    def it_should_write_only_the_header_when_empty(self):
        assert dump_export_csv([]).splitlines() == [
            '"ID","Date","Account","Type","Category","Description","Amount"'
        ]


class DescribeLegacyFiles:
    def it_should_read_the_legacy_transactions_csv(self):
        text = (
            '"ID","Date","Compte","Type","Catégorie","Description","Montant"\n'
            '"1","02/03/2024","Caisse","Débit","Nourriture","Pain, lait","4.5"\n'
            '"2","03/03/2024","Banque","Crédit","Salaire","Paie","2000.0"\n'
        )
        result = load_legacy_transactions_csv(text)
        assert [t.id for t in result] == [1, 2]
        assert result[0].date == date(2024, 3, 2)
        assert result[0].description == "Pain, lait"
        assert result[1].direction is TransactionDirection.CREDIT

    def it_should_skip_malformed_rows(self, caplog):
        text = (
            '"ID","Date","Compte","Type","Catégorie","Description","Montant"\n'
            '"1","02/03/2024","Caisse","Débit"\n'
            '"x","02/03/2024","Caisse","Débit","Nourriture","Bad id","4.5"\n'
            '"3","31/02/2024","Caisse","Débit","Nourriture","Bad date","4.5"\n'
            '"4","04/03/2024","Caisse","Débit","Nourriture","Fine","abc"\n'
            '"5","04/03/2024","Caisse","Débit","Nourriture","Good","1"\n'
        )
        with caplog.at_level(logging.WARNING):
            result = load_legacy_transactions_csv(text)
        assert [t.id for t in result] == [5]

    def it_should_read_name_value_balances(self):
        text = "Caisse=12.5\nBanque=-3.0\n\nbroken line\nÉpargne=abc\n"
        assert load_legacy_balances(text) == {
            "Caisse": Decimal("12.5"),
            "Banque": Decimal("-3.0"),
        }


class DescribeUnparseableInput:
    def it_should_report_deeply_nested_json_as_unreadable(self):
        text = "[" * 200_000
        with pytest.raises(ValueError):
            load_transactions_json(text)
        with pytest.raises(ValueError):
            load_state_json(text)

    def it_should_report_oversized_legacy_csv_fields_as_unreadable(self):
        text = (
            '"ID","Date","Compte","Type","Catégorie","Description","Montant"\n'
            f'"1","02/03/2024","Cash","Débit","Nourriture","{"x" * 200_000}","4.5"\n'
        )
        with pytest.raises(ValueError):
            load_legacy_transactions_csv(text)
