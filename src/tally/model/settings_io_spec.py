from __future__ import annotations

from pathlib import Path
from tempfile import TemporaryDirectory

from tally.model.settings import Settings
from tally.model.settings_io import load_settings, save_settings


class DescribeSettingsIo:
    def it_should_return_defaults_when_file_missing(self):
        with TemporaryDirectory() as tmpdir:
            settings = load_settings(Path(tmpdir) / "config" / "settings.yml")
            assert settings.default_accounts == ["Cash", "Bank", "Savings"]
            assert settings.currency_symbol == "€"

    def it_should_round_trip_through_yaml(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config" / "settings.yml"
            save_settings(path, Settings(default_accounts=["Wallet", "Checking"], currency_symbol="$"))
            loaded = load_settings(path)
            assert loaded.default_accounts == ["Wallet", "Checking"]
            assert loaded.currency_symbol == "$"

    def it_should_fall_back_to_defaults_on_invalid_content(self, caplog):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "settings.yml"
            path.write_text("default_accounts: []\n", encoding="utf-8")
            assert load_settings(path) == Settings()
            assert "Ignoring invalid settings" in caplog.text

    def it_should_fall_back_to_defaults_on_broken_yaml(self):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "settings.yml"
            path.write_text("default_accounts: [unclosed\n", encoding="utf-8")
            assert load_settings(path) == Settings()


class DescribeSettings:
    def it_should_strip_and_deduplicate_accounts(self):
        settings = Settings(default_accounts=[" Cash ", "Bank", "Cash", ""])
        assert settings.default_accounts == ["Cash", "Bank"]
