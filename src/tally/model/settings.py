from __future__ import annotations

"""
User settings for a tally workspace.

Scope
- Pure Pydantic v2 model mirroring config/settings.yml
- No I/O operations (handled by settings_io.py)
"""

from pydantic import BaseModel, Field, field_validator

from tally.config import DEFAULT_ACCOUNTS, DEFAULT_CURRENCY_SYMBOL


class Settings(BaseModel):
    """Workspace settings: accounts seeded at zero and display currency."""

    default_accounts: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ACCOUNTS),
        description="Accounts always present in the balance map",
    )
    currency_symbol: str = Field(default=DEFAULT_CURRENCY_SYMBOL, description="Display symbol")

    @field_validator("default_accounts")
    @classmethod
    def _clean_accounts(cls, value: list[str]) -> list[str]:
        """Strip names, drop blanks and duplicates, keep order."""
        seen: list[str] = []
        for name in value:
            name = name.strip()
            if name and name not in seen:
                seen.append(name)
        if not seen:
            raise ValueError("default_accounts must name at least one account")
        return seen


__all__ = ["Settings"]
