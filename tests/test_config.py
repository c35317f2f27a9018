import pytest

from increase.client import Client, get_default_client, set_default_client
from increase.config import ClientConfig
from increase.errors import ConfigurationError


def test_defaults_to_production(monkeypatch):
    monkeypatch.delenv("INCREASE_ENVIRONMENT", raising=False)
    monkeypatch.delenv("INCREASE_BASE_URL", raising=False)
    assert ClientConfig().resolved_base_url == "https://api.increase.com"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("INCREASE_API_KEY", "env_key")
    monkeypatch.setenv("INCREASE_ENVIRONMENT", "sandbox")
    monkeypatch.setenv("INCREASE_TIMEOUT", "5")

    cfg = ClientConfig()
    assert cfg.api_key == "env_key"
    assert cfg.resolved_base_url == "https://sandbox.increase.com"
    assert cfg.timeout == 5.0


def test_base_url_override_wins():
    cfg = ClientConfig(environment="sandbox", base_url="http://localhost:8080/")
    assert cfg.resolved_base_url == "http://localhost:8080"


def test_invalid_config_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        Client(environment="staging")


def test_client_overrides_on_existing_config():
    with Client(ClientConfig(api_key="a"), api_key="b") as client:
        assert client.config.api_key == "b"


def test_default_client_is_built_once_and_replaceable(monkeypatch):
    monkeypatch.setenv("INCREASE_API_KEY", "k")
    first = get_default_client()
    assert get_default_client() is first

    mine = Client(api_key="mine")
    set_default_client(mine)
    assert get_default_client() is mine
    assert first.connection.is_closed


def test_replacing_the_default_client_closes_the_old_one():
    old = Client(api_key="old")
    new = Client(api_key="new")
    set_default_client(old)

    set_default_client(new)
    assert old.connection.is_closed
    assert not new.connection.is_closed

    # installing the same client again keeps it open
    set_default_client(new)
    assert not new.connection.is_closed

    set_default_client(None)
    assert new.connection.is_closed
