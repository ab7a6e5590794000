from __future__ import annotations

"""
Ledger text formats <-> model conversion (pure text, no disk I/O).

Current format
- Transactions blob: JSON object {"schema_version": 2, "transactions": [...]}
- State blob: JSON object {"schema_version": 2, "balances": {...}, "budgets": {...}}
- Decimals as strings, dates as ISO, enums by machine value.

Backward compatibility
- Schema 1 blobs have no schema_version. Transactions may be a bare list and
  records may carry display labels ("Débit", "Nourriture") or the old field
  names ("type", "montant"). Budget keys may be plain label strings.
- Every raw record goes through the same normalizers regardless of version,
  so one code path reads both shapes.
- The line-oriented files written by the earlier desktop version of the ledger
  (transactions.csv, account_balances.txt) are parsed here too.

Unknown labels are recovered (category -> Other, direction -> Debit) and
malformed records are skipped; both are logged as warnings. Only a blob
that is not parseable at all raises ValueError.
"""

import csv
import io
import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import ValidationError

from tally.config import EXPORT_DATE_FORMAT, EXPORT_HEADER, SCHEMA_VERSION
from tally.model.errors import UnknownCategoryError, UnknownDirectionError
from tally.model.transaction import Transaction
from tally.model.types import TransactionCategory, TransactionDirection

log = logging.getLogger(__name__)

# Date layouts accepted when reading; ISO first, then the export/legacy layout.
_DATE_FORMATS = ("%Y-%m-%d", EXPORT_DATE_FORMAT)

# Old field names seen in schema 1 records, mapped to current names.
_FIELD_ALIASES = {
    "type": "direction",
    "montant": "amount",
    "compte": "account",
    "categorie": "category",
}


@dataclass
class LedgerState:
    """Balances and budgets as read from the state blob."""

    balances: dict[str, Decimal] = field(default_factory=dict)
    budgets: dict[TransactionCategory, Decimal] = field(default_factory=dict)
    schema_version: int = SCHEMA_VERSION


# ---- Normalizers shared by every schema version ----


def normalize_category(raw: Any) -> TransactionCategory:
    """Resolve a stored category; unknown labels fall back to Other."""
    if isinstance(raw, TransactionCategory):
        return raw
    try:
        return TransactionCategory.from_label(str(raw or ""))
    except UnknownCategoryError:
        log.warning("Unknown category %r recovered as %s", raw, TransactionCategory.OTHER.label)
        return TransactionCategory.OTHER


def normalize_direction(raw: Any) -> TransactionDirection:
    """Resolve a stored direction; unknown labels fall back to Debit."""
    if isinstance(raw, TransactionDirection):
        return raw
    try:
        return TransactionDirection.from_label(str(raw or ""))
    except UnknownDirectionError:
        log.warning(
            "Unknown direction %r recovered as %s", raw, TransactionDirection.DEBIT.label
        )
        return TransactionDirection.DEBIT


def parse_decimal(raw: Any) -> Decimal:
    """Parse a stored number. Raises ValueError when not a finite decimal."""
    if isinstance(raw, bool) or raw is None:
        raise ValueError(f"Not a number: {raw!r}")
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {raw!r}") from e
    if not value.is_finite():
        raise ValueError(f"Not a finite number: {raw!r}")
    return value


def parse_date(raw: Any) -> date:
    if isinstance(raw, date):
        return raw
    text = str(raw or "").strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date: {raw!r}")


def _canonical_record(raw: Mapping[str, Any]) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for key, value in raw.items():
        name = str(key).strip().lower()
        record[_FIELD_ALIASES.get(name, name)] = value
    return record


def transaction_from_record(raw: Mapping[str, Any]) -> Transaction:
    """Build a Transaction from a raw record of any known schema.

    Raises:
        ValueError: if the record cannot be normalized (bad id, date or amount)
    """
    record = _canonical_record(raw)
    try:
        return Transaction(
            id=int(str(record.get("id", "")).strip()),
            date=parse_date(record.get("date")),
            account=str(record.get("account") or "").strip(),
            direction=normalize_direction(record.get("direction")),
            category=normalize_category(record.get("category")),
            description=str(record.get("description") or ""),
            amount=parse_decimal(record.get("amount")),
        )
    except ValidationError as ve:
        raise ValueError(f"Invalid transaction record: {ve}") from ve


def _schema_version(doc: Mapping[str, Any]) -> int:
    version = doc.get("schema_version", 1)
    try:
        version = int(version)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid schema_version: {version!r}") from e
    if version > SCHEMA_VERSION:
        log.warning(
            "Blob declares schema %s, newer than supported %s; reading best-effort",
            version,
            SCHEMA_VERSION,
        )
    return version


def _records_from(records: Iterable[Any], source: str) -> list[Transaction]:
    result: list[Transaction] = []
    seen_ids: set[int] = set()
    for index, raw in enumerate(records):
        if not isinstance(raw, Mapping):
            log.warning("Skipping %s record %d: not an object", source, index)
            continue
        try:
            txn = transaction_from_record(raw)
        except ValueError as e:
            log.warning("Skipping %s record %d: %s", source, index, e)
            continue
        if txn.id in seen_ids:
            log.warning("Skipping %s record %d: duplicate id %d", source, index, txn.id)
            continue
        seen_ids.add(txn.id)
        result.append(txn)
    return result


# ---- Current JSON blobs ----


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)  # JSONDecodeError is a ValueError
    except RecursionError as e:
        raise ValueError("Blob is nested too deeply to parse") from e


def dump_transactions_json(transactions: Iterable[Transaction]) -> str:
    doc = {
        "schema_version": SCHEMA_VERSION,
        "transactions": [t.model_dump(mode="json") for t in transactions],
    }
    return json.dumps(doc, ensure_ascii=False, indent=2)


def load_transactions_json(text: str) -> list[Transaction]:
    """Parse a transactions blob of any known schema.

    Raises:
        ValueError: if the text is not JSON or has no recognizable shape
    """
    doc = _parse_json(text)
    if isinstance(doc, list):
        records = doc
    elif isinstance(doc, dict):
        _schema_version(doc)
        records = doc.get("transactions")
        if not isinstance(records, list):
            raise ValueError("Transactions blob has no 'transactions' list")
    else:
        raise ValueError("Transactions blob is neither an object nor a list")
    return _records_from(records, "transactions")


def dump_state_json(
    balances: Mapping[str, Decimal], budgets: Mapping[TransactionCategory, Decimal]
) -> str:
    doc = {
        "schema_version": SCHEMA_VERSION,
        "balances": {name: str(value) for name, value in balances.items()},
        "budgets": {category.value: str(value) for category, value in budgets.items()},
    }
    return json.dumps(doc, ensure_ascii=False, indent=2)


def _balances_from(raw: Any) -> dict[str, Decimal]:
    if not isinstance(raw, Mapping):
        raise ValueError("State blob has no 'balances' object")
    balances: dict[str, Decimal] = {}
    for name, value in raw.items():
        name = str(name).strip()
        if not name:
            log.warning("Skipping balance with empty account name")
            continue
        try:
            balances[name] = parse_decimal(value)
        except ValueError as e:
            log.warning("Skipping balance for account %r: %s", name, e)
    return balances


def budgets_from(raw: Any) -> dict[TransactionCategory, Decimal]:
    """Normalize a budget map whose keys may be enum values or plain labels.

    Unknown keys are bucketed into Other. Salary and negative amounts are
    dropped with a warning.
    """
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValueError("State blob 'budgets' is not an object")
    budgets: dict[TransactionCategory, Decimal] = {}
    for key, value in raw.items():
        category = normalize_category(key)
        if not category.is_budgetable:
            log.warning("Dropping budget for unbudgetable category %r", key)
            continue
        try:
            amount = parse_decimal(value)
        except ValueError as e:
            log.warning("Skipping budget for %r: %s", key, e)
            continue
        if amount < 0:
            log.warning("Skipping negative budget for %r: %s", key, amount)
            continue
        budgets[category] = budgets.get(category, Decimal("0")) + amount
    return budgets


def load_state_json(text: str) -> LedgerState:
    """Parse a balances+budgets blob of any known schema.

    Raises:
        ValueError: if the text is not JSON or has no recognizable shape
    """
    doc = _parse_json(text)
    if not isinstance(doc, dict):
        raise ValueError("State blob is not an object")
    version = _schema_version(doc)
    return LedgerState(
        balances=_balances_from(doc.get("balances")),
        budgets=budgets_from(doc.get("budgets")),
        schema_version=version,
    )


# ---- CSV export ----


def dump_export_csv(transactions: Iterable[Transaction]) -> str:
    """Serialize transactions to the 7-column export CSV.

    Every field is double-quoted with embedded quotes doubled. Type and
    Category carry display labels; Amount is the raw decimal.
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for t in transactions:
        writer.writerow(
            [
                t.id,
                t.date.strftime(EXPORT_DATE_FORMAT),
                t.account,
                t.direction.label,
                t.category.label,
                t.description,
                str(t.amount),
            ]
        )
    return output.getvalue()


# ---- Legacy line-oriented files ----


def load_legacy_transactions_csv(text: str) -> list[Transaction]:
    """Parse the legacy desktop version's transactions.csv.

    Layout: one header line, then 7 quoted columns per row
    (id, dd/MM/yyyy date, account, type label, category label, description,
    amount). Rows with the wrong column count or unparseable values are
    skipped with a warning.

    Raises:
        ValueError: if the text cannot be tokenized as CSV
    """
    reader = csv.reader(io.StringIO(text))
    records: list[dict[str, str]] = []
    try:
        next(reader, None)  # header
        for line_no, row in enumerate(reader, start=2):
            if not row:
                continue
            if len(row) != len(EXPORT_HEADER):
                log.warning(
                    "Skipping legacy transactions line %d: expected %d columns, got %d",
                    line_no,
                    len(EXPORT_HEADER),
                    len(row),
                )
                continue
            records.append(dict(zip([h.lower() for h in EXPORT_HEADER], row)))
    except csv.Error as e:
        raise ValueError(f"Unreadable legacy transactions file: {e}") from e
    # The legacy header says "Type" for the direction; the alias map covers it.
    return _records_from(records, "legacy transactions")


def load_legacy_balances(text: str) -> dict[str, Decimal]:
    """Parse the legacy desktop version's account_balances.txt (name=value lines)."""
    balances: dict[str, Decimal] = {}
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        name, sep, value = line.partition("=")
        if not sep or not name.strip():
            log.warning("Skipping legacy balance line %d: no name=value pair", line_no)
            continue
        try:
            balances[name.strip()] = parse_decimal(value)
        except ValueError as e:
            log.warning("Skipping legacy balance line %d: %s", line_no, e)
    return balances


__all__ = [
    "LedgerState",
    "budgets_from",
    "dump_export_csv",
    "dump_state_json",
    "dump_transactions_json",
    "load_legacy_balances",
    "load_legacy_transactions_csv",
    "load_state_json",
    "load_transactions_json",
    "normalize_category",
    "normalize_direction",
    "parse_date",
    "parse_decimal",
    "transaction_from_record",
]
