import pytest
import yaml

from docschema.cli_config import DocSchemaSettings
from docschema.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for var in (
        "DOCSCHEMA_PROJECT",
        "DOCSCHEMA_DATABASE",
        "DOCSCHEMA_MODE",
        "DOCSCHEMA_SAMPLE_COUNT",
        "DOCSCHEMA_INFER_DATETIMES",
        "DOCSCHEMA_OUTPUT_DIR",
        "DOCSCHEMA_COLOR",
        "DOCSCHEMA_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


def test_defaults_without_config_file():
    settings = DocSchemaSettings.load()
    assert settings.default_mode == "auto"
    assert settings.default_sample_count == 50
    assert settings.project is None
    assert DocSchemaSettings.find_config_file() is None


def test_discovers_config_file(tmp_path):
    (tmp_path / "docschema.yml").write_text("project: demo\ndefault_sample_count: 10\n")
    settings = DocSchemaSettings.load()
    assert settings.project == "demo"
    assert settings.default_sample_count == 10


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "custom.yml"
    path.write_text("project: from-file\ninfer_datetimes: false\n")
    monkeypatch.setenv("DOCSCHEMA_PROJECT", "from-env")
    monkeypatch.setenv("DOCSCHEMA_INFER_DATETIMES", "yes")
    monkeypatch.setenv("DOCSCHEMA_SAMPLE_COUNT", "not-a-number")

    settings = DocSchemaSettings.load(str(path))

    assert settings.project == "from-env"
    assert settings.infer_datetimes is True
    assert settings.default_sample_count == 50


def test_invalid_values_are_rejected(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("default_mode: sideways\n")
    with pytest.raises(ConfigurationError):
        DocSchemaSettings.load(str(path))


def test_missing_explicit_file():
    with pytest.raises(ConfigurationError):
        DocSchemaSettings.load("does-not-exist.yml")


def test_non_mapping_file(tmp_path):
    path = tmp_path / "list.yml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError):
        DocSchemaSettings.load(str(path))


def test_save_skips_unset_values(tmp_path):
    path = tmp_path / "nested" / "docschema.yml"
    DocSchemaSettings(database="analytics").save(str(path))

    data = yaml.safe_load(path.read_text())
    assert data["database"] == "analytics"
    assert "project" not in data
    assert DocSchemaSettings.load(str(path)).database == "analytics"


def test_to_config():
    settings = DocSchemaSettings(infer_datetimes=True, default_sample_count=9000, color_mode="never")
    cfg = settings.to_config()
    assert cfg.infer_datetimes is True
    assert cfg.default_sample_count == 500
    assert cfg.color_enabled is False
    assert settings.to_config(infer_datetimes=False).infer_datetimes is False
