import dataclasses

import pytest

from openai_api import Client, ClientConfig, ConfigurationError
from openai_api.config import DEFAULT_BASE_URL

ENV_VARS = ("OPENAI_API_KEY", "OPENAI_API_BASE", "OPENAI_BASE_URL", "OPENAI_ORG_ID", "OPENAI_ORGANIZATION", "OPENAI_TIMEOUT")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # setenv first so teardown also removes values load_dotenv writes
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # keep load_dotenv from finding a real .env further up the tree
    monkeypatch.chdir(tmp_path)


def test_from_env_reads_variables(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_API_BASE", "https://proxy.test/v1/")
    monkeypatch.setenv("OPENAI_ORG_ID", "org_9")
    monkeypatch.setenv("OPENAI_TIMEOUT", "12.5")

    config = ClientConfig.from_env(dotenv_path=tmp_path / "missing.env")

    assert config.api_key == "sk-env"
    assert config.base_url == "https://proxy.test/v1"
    assert config.organization == "org_9"
    assert config.timeout == 12.5


def test_from_env_loads_dotenv_file(tmp_path):
    env_file = tmp_path / "settings.env"
    env_file.write_text("OPENAI_API_KEY=sk-dotenv\n")

    config = ClientConfig.from_env(dotenv_path=env_file)

    assert config.api_key == "sk-dotenv"
    assert config.base_url == DEFAULT_BASE_URL


def test_from_env_without_key_fails(tmp_path):
    with pytest.raises(ConfigurationError):
        ClientConfig.from_env(dotenv_path=tmp_path / "missing.env")


def test_from_env_rejects_bad_timeout(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError):
        ClientConfig.from_env(dotenv_path=tmp_path / "missing.env")


def test_overrides_win(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

    config = ClientConfig.from_env(dotenv_path=tmp_path / "missing.env", timeout=5.0)

    assert config.timeout == 5.0


def test_config_is_immutable():
    config = ClientConfig(api_key="sk-test")

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.api_key = "other"


def test_repr_hides_key():
    assert "sk-secret" not in repr(ClientConfig(api_key="sk-secret"))


@pytest.mark.parametrize("kwargs", [{"api_key": ""}, {"api_key": "sk", "timeout": 0}])
def test_invalid_config(kwargs):
    with pytest.raises(ConfigurationError):
        ClientConfig(**kwargs)


def test_client_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

    with Client.from_env(dotenv_path=tmp_path / "missing.env") as client:
        assert client.config.api_key == "sk-env"
        assert client.runs is not None


def test_client_keyword_options_are_validated():
    with pytest.raises(ConfigurationError):
        Client(api_key="sk-test", timeout=0)

    client = Client(api_key="sk-test", organization="org_1", base_url="https://proxy.test/v1")
    assert client.config.organization == "org_1"
    assert client.config.base_url == "https://proxy.test/v1"
