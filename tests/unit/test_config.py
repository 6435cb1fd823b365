import pytest

from pathlib import Path

from globaldefs.config.loader import (
    DEFAULT_SETTINGS_PATH,
    initialize_settings,
    load_global_defs,
    load_settings,
)
from globaldefs.config.schema import AppSettings, FeatureConfig, parse_settings


def test_load_defaults() -> None:
    settings = load_settings(Path("globaldefs/config/defaults.yml"))
    assert settings.features.vrrp is True
    assert settings.features.lvs is True
    assert settings.features.bfd is False
    assert settings.features.snmp is False
    assert settings.features.dbus is False
    assert settings.features.ipvs_syncd_attributes is True
    assert settings.logging.level == "INFO"
    assert settings.logging.fmt == "text"
    assert settings.logging.sink == "stdout"
    assert settings.logging.service_name == "globaldefs"


def test_defaults_follow_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLOBALDEFS_WITH_SNMP", "true")
    monkeypatch.setenv("GLOBALDEFS_WITH_BFD", "yes")
    settings = load_settings(DEFAULT_SETTINGS_PATH)
    assert settings.features.snmp is True
    assert settings.features.bfd is True
    assert settings.features.dbus is False


def test_required_environment_variable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GLOBALDEFS_LOG_LEVEL", raising=False)
    path = tmp_path / "settings.yml"
    path.write_text("logging:\n  level: ${GLOBALDEFS_LOG_LEVEL}\n", encoding="utf-8")
    with pytest.raises(ValueError, match="missing required environment variable 'GLOBALDEFS_LOG_LEVEL'"):
        load_settings(path)


def test_empty_settings_use_dataclass_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.yml"
    path.write_text("", encoding="utf-8")
    settings = load_settings(path)
    assert settings == AppSettings()
    assert settings.features == FeatureConfig()
    assert settings.logging.fmt == "ecs_json"


def test_parse_settings_rejects_unknown_feature() -> None:
    with pytest.raises(ValueError, match="unknown feature flag"):
        parse_settings({"features": {"vrrp": True, "quic": True}})


def test_parse_settings_rejects_non_boolean_feature() -> None:
    with pytest.raises(ValueError, match="'features.lvs' must be a boolean"):
        parse_settings({"features": {"lvs": "sometimes"}})


def test_parse_settings_validates_logging() -> None:
    with pytest.raises(ValueError, match="invalid log level"):
        parse_settings({"logging": {"level": "LOUD"}})
    with pytest.raises(ValueError, match="invalid log format"):
        parse_settings({"logging": {"format": "xml"}})
    with pytest.raises(ValueError, match="requires 'logging.file_path'"):
        parse_settings({"logging": {"sink": "file"}})

    settings = parse_settings({"logging": {"level": "debug", "sink": "file", "file_path": "/tmp/gd.log"}})
    assert settings.logging.level == "DEBUG"
    assert settings.logging.file_path == "/tmp/gd.log"


def test_settings_must_be_a_mapping(tmp_path: Path) -> None:
    path = tmp_path / "settings.yml"
    path.write_text("- vrrp\n- lvs\n", encoding="utf-8")
    with pytest.raises(ValueError, match="settings must be a mapping, not list"):
        load_settings(path)


def test_fallbacks_expand_inside_longer_strings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GLOBALDEFS_LOG_DIR", raising=False)
    monkeypatch.setenv("GLOBALDEFS_SERVICE", "lb-east")
    path = tmp_path / "settings.yml"
    path.write_text(
        "logging:\n  sink: file\n  file_path: ${GLOBALDEFS_LOG_DIR:-/var/log}/gd.log\n"
        "  service_name: ${GLOBALDEFS_SERVICE:-globaldefs}\n",
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings.logging.file_path == "/var/log/gd.log"
    assert settings.logging.service_name == "lb-east"


def test_load_settings_defaults_to_bundled_file() -> None:
    assert load_settings() == load_settings(DEFAULT_SETTINGS_PATH)


def test_missing_settings_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "absent.yml")


def test_initialize_settings(tmp_path: Path) -> None:
    path = tmp_path / "config" / "globaldefs.yml"
    initialize_settings(path)
    assert path.read_text(encoding="utf-8") == DEFAULT_SETTINGS_PATH.read_text(encoding="utf-8")

    with pytest.raises(FileExistsError):
        initialize_settings(path)
    initialize_settings(path, force=True)


def test_load_global_defs_from_file(tmp_path: Path) -> None:
    path = tmp_path / "keepalived.conf"
    path.write_text(
        "global_defs {\n  router_id LVS_1\n  vrrp_version 4\n  snmp_socket tcp:localhost:705\n}\n",
        encoding="utf-8",
    )
    settings = AppSettings(features=FeatureConfig(snmp=False))

    result = load_global_defs(path, settings)

    assert result.snapshot.alerts.router_id == "LVS_1"
    assert result.snapshot.vrrp.version == 2
    assert [diagnostic.lineno for diagnostic in result.diagnostics] == [3, 4]
    assert result.diagnostics[1].message == "Unknown keyword 'snmp_socket'"
    assert result.diagnostics[0].source == str(path)


def test_load_global_defs_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_global_defs(tmp_path / "missing.conf")
