"""tally - a local personal finance ledger with budgets and reports."""

__version__ = "0.1.0"
