from tally.storage.ledger_store import IdCounter, LedgerStore
from tally.storage.repository import LedgerRepository, LoadResult

__all__ = ["IdCounter", "LedgerRepository", "LedgerStore", "LoadResult"]
