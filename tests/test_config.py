"""Tests for ImporterSettings."""

import pytest
from pathlib import Path
from pydantic import ValidationError

from rqg_importer.config import MODULE_ID, ImporterSettings


class TestImporterSettings:

    def test_defaults(self):
        settings = ImporterSettings()
        assert settings.module_id == MODULE_ID
        assert settings.storage_dir == Path("rqg_data")
        assert settings.language == "en"
        assert settings.log_level == "INFO"
        assert settings.fetch_timeout == 10.0

    def test_log_level_normalized(self):
        assert ImporterSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            ImporterSettings(log_level="chatty")

    def test_fetch_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ImporterSettings(fetch_timeout=0)

    def test_module_id_is_frozen(self):
        settings = ImporterSettings()
        with pytest.raises(ValidationError):
            settings.module_id = "something-else"


class TestFromEnv:

    def test_reads_environment(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("RQG_IMPORTER_STORAGE_DIR", str(tmp_path / "store"))
        monkeypatch.setenv("RQG_IMPORTER_LANG", "de")
        monkeypatch.setenv("RQG_IMPORTER_LOG_LEVEL", "warning")
        monkeypatch.setenv("RQG_IMPORTER_FETCH_TIMEOUT", "2.5")

        settings = ImporterSettings.from_env()

        assert settings.storage_dir == tmp_path / "store"
        assert settings.language == "de"
        assert settings.log_level == "WARNING"
        assert settings.fetch_timeout == 2.5

    def test_unset_variables_use_defaults(self, monkeypatch):
        for name in (
            "RQG_IMPORTER_STORAGE_DIR",
            "RQG_IMPORTER_LANG",
            "RQG_IMPORTER_LOG_LEVEL",
            "RQG_IMPORTER_FETCH_TIMEOUT",
        ):
            monkeypatch.delenv(name, raising=False)

        assert ImporterSettings.from_env() == ImporterSettings()
