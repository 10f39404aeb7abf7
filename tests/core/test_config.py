"""Tests for settings loading and precedence."""

import pytest

from unistring.core.config import Settings

# Mark all tests as unit tests
pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every test in an empty directory with no settings in the environment."""
    monkeypatch.chdir(tmp_path)
    for name in Settings.model_fields:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def test_defaults():
    """Test default settings values."""
    settings = Settings()
    assert settings.PROPERTY_CACHE_SIZE == 1024
    assert settings.DEFAULT_PAD == " "
    assert settings.OUTPUT_FORMAT == "text"
    assert settings.JARO_PRECISION == 4
    assert settings.CLI_HEX_OUTPUT is False
    assert settings.LOG_FORMAT == "auto"
    assert settings.LOG_LEVEL == "WARNING"


def test_field_set():
    """Test that every setting is one the library or CLI reads."""
    assert set(Settings.model_fields) == {
        "PROPERTY_CACHE_SIZE",
        "DEFAULT_PAD",
        "OUTPUT_FORMAT",
        "JARO_PRECISION",
        "CLI_HEX_OUTPUT",
        "LOG_FORMAT",
        "LOG_LEVEL",
    }


def test_environment_variables(monkeypatch):
    """Test that environment variables populate settings."""
    monkeypatch.setenv("JARO_PRECISION", "2")
    monkeypatch.setenv("CLI_HEX_OUTPUT", "true")
    settings = Settings()
    assert settings.JARO_PRECISION == 2
    assert settings.CLI_HEX_OUTPUT is True


def test_yaml_config_file(isolated_cwd):
    """Test loading an explicit YAML config file."""
    config = isolated_cwd / "custom.yaml"
    config.write_text("DEFAULT_PAD: '*'\nOUTPUT_FORMAT: json\n")
    settings = Settings.load_config(str(config))
    assert settings.DEFAULT_PAD == "*"
    assert settings.OUTPUT_FORMAT == "json"


def test_toml_config_file(isolated_cwd):
    """Test loading an explicit TOML config file."""
    config = isolated_cwd / "custom.toml"
    config.write_text('LOG_FORMAT = "json"\nPROPERTY_CACHE_SIZE = 64\n')
    settings = Settings.load_config(str(config))
    assert settings.LOG_FORMAT == "json"
    assert settings.PROPERTY_CACHE_SIZE == 64


def test_auto_discovery(isolated_cwd):
    """Test that .unistring.yaml in the working directory is picked up."""
    (isolated_cwd / ".unistring.yaml").write_text("JARO_PRECISION: 6\n")
    assert Settings.load_config().JARO_PRECISION == 6


def test_no_config_file():
    """Test that load_config falls back to defaults."""
    assert Settings.load_config().JARO_PRECISION == 4


def test_environment_beats_config_file(isolated_cwd, monkeypatch):
    """Test config file < env precedence."""
    (isolated_cwd / ".unistring.yaml").write_text("JARO_PRECISION: 6\nDEFAULT_PAD: '-'\n")
    monkeypatch.setenv("JARO_PRECISION", "3")
    settings = Settings.load_config()
    assert settings.JARO_PRECISION == 3
    assert settings.DEFAULT_PAD == "-"


def test_dotenv_file(isolated_cwd):
    """Test that a .env file in the working directory is read."""
    (isolated_cwd / ".env").write_text("OUTPUT_FORMAT=json\n")
    assert Settings().OUTPUT_FORMAT == "json"
