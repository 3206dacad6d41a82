import pytest

from bigquery_rest.config import DEFAULT_BASE_URL, Config

CONFIG_ENV_VARS = [
    "GCP_PROJECT_ID",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "BIGQUERY_EMULATOR_HOST",
    "BIGQUERY_LOCATION",
    "BIGQUERY_MAX_RESULTS",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = Config()

    assert config.GCP_PROJECT_ID is None
    assert config.BIGQUERY_MAX_RESULTS is None
    assert config.LOG_LEVEL == "INFO"
    assert config.base_url == DEFAULT_BASE_URL
    assert config.use_emulator is False


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("GCP_PROJECT_ID", "my-project")
    monkeypatch.setenv("BIGQUERY_LOCATION", "EU")
    monkeypatch.setenv("BIGQUERY_MAX_RESULTS", "500")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = Config()
    config.validate()

    assert config.GCP_PROJECT_ID == "my-project"
    assert config.BIGQUERY_LOCATION == "EU"
    assert config.BIGQUERY_MAX_RESULTS == 500
    assert config.LOG_LEVEL == "DEBUG"


def test_emulator_host_changes_base_url(monkeypatch):
    monkeypatch.setenv("BIGQUERY_EMULATOR_HOST", "localhost:9050")

    config = Config()

    assert config.use_emulator is True
    assert config.base_url == "http://localhost:9050/bigquery/v2"


def test_validate_requires_project():
    with pytest.raises(ValueError, match="GCP_PROJECT_ID"):
        Config().validate()


def test_validate_rejects_non_positive_page_size(monkeypatch):
    monkeypatch.setenv("GCP_PROJECT_ID", "my-project")
    monkeypatch.setenv("BIGQUERY_MAX_RESULTS", "0")

    with pytest.raises(ValueError, match="BIGQUERY_MAX_RESULTS"):
        Config().validate()


def test_non_numeric_page_size_is_a_configuration_error(monkeypatch):
    monkeypatch.setenv("BIGQUERY_MAX_RESULTS", "many")

    with pytest.raises(ValueError):
        Config()
