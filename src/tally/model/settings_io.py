from __future__ import annotations

"""
Settings I/O (YAML loading and saving) for config/settings.yml.

Privacy
- All operations are local file I/O only
- No network access
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from tally.model.settings import Settings

log = logging.getLogger(__name__)


def load_settings(path: Path) -> Settings:
    """Load settings from YAML locally (safe loader).

    A missing file yields default settings. An unreadable or invalid file also
    yields defaults, with a warning, so a bad edit never locks the user out of
    their ledger.

    Args:
        path: Path to settings.yml

    Returns:
        Settings instance
    """
    if not path.exists():
        return Settings()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return Settings.model_validate(data)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        log.warning("Ignoring invalid settings file %s: %s", path, e)
        return Settings()


def save_settings(path: Path, settings: Settings) -> None:
    """Write settings to YAML. Creates parent directories if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump(mode="json")
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(
            data,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


__all__ = ["load_settings", "save_settings"]
