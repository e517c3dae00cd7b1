from __future__ import annotations

from wot_scripting.main.config import AppSettings, LoggingSettings, get_settings
from wot_scripting.shared.consts import EnumEnvironment, EnumInputValueType


def test_get_settings_loads_defaults(monkeypatch) -> None:
    monkeypatch.delenv("NODE_CACHE_MINUTES", raising=False)
    settings = get_settings()
    assert settings.node.cache_minutes == 15
    assert settings.node.filter_mode == "affordanceName"
    assert settings.node.input_value_type is EnumInputValueType.STRING
    assert settings.runtime.verify_tls is True
    assert settings.environment == EnumEnvironment.DEVELOPMENT


def test_settings_respect_environment_variables(monkeypatch) -> None:
    monkeypatch.setenv("NODE_CACHE_MINUTES", "0")
    monkeypatch.setenv("NODE_OUTPUT_VAR_TYPE", "flow")
    monkeypatch.setenv("RUNTIME_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("SERVICE_TITLE", "Testing")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("GIT_COMMIT", "deadbeef")

    settings = AppSettings()

    assert settings.node.cache_minutes == 0
    assert settings.node.output_var_type == "flow"
    assert settings.runtime.http_timeout == 2.5
    assert settings.service.title == "Testing"
    assert settings.service.git_commit == "deadbeef"
    assert settings.logging.level.value == "DEBUG"


def test_logging_settings_only_carry_applied_values(monkeypatch, tmp_path) -> None:
    log_file = tmp_path / "wot.log"
    monkeypatch.setenv("LOG_FILE_PATH", str(log_file))

    settings = AppSettings()

    assert set(LoggingSettings.model_fields) == {"level", "file_path"}
    assert settings.logging.file_path == str(log_file)
