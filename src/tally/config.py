"""
Central constants for the tally ledger.

Path resolution lives in tally.workspace.Workspace, which provides a single
workspace root with computed path properties for all data locations:
  1. Explicit --data-dir CLI option
  2. TALLY_DATA environment variable
  3. Current working directory

User-editable settings (default accounts, currency symbol) live in
config/settings.yml and are loaded by tally.model.settings_io.
"""

from decimal import Decimal

# Current on-disk schema for the JSON blobs. Blobs without a schema_version
# key are treated as schema 1 (label-based enums, bare lists).
SCHEMA_VERSION = 2

BACKUP_SUFFIX = ".bak"

DEFAULT_ACCOUNTS = ("Cash", "Bank", "Savings")
DEFAULT_CURRENCY_SYMBOL = "€"

# Spend at or below this share of the budget is reported as comfortably OK.
NEAR_LIMIT_RATIO = Decimal("0.8")

EXPORT_DATE_FORMAT = "%d/%m/%Y"
EXPORT_HEADER = ["ID", "Date", "Account", "Type", "Category", "Description", "Amount"]

FILTER_ALL = "all"

LOG_LEVEL_ENV = "TALLY_LOG_LEVEL"
