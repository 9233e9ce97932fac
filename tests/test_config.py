import pytest
from pydantic import ValidationError

from certificate_registry.config import Settings


def test_defaults(monkeypatch):
    for name in ("DEPLOYER", "NETWORK", "SMOKE_TEST", "REQUIRE_ALGORAND_ADDRESSES", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("certificate_registry.config.load_dotenv", lambda: False)

    settings = Settings.from_env()
    assert settings.deployer_mnemonic is None
    assert settings.network == "localnet"
    assert settings.smoke_test is True
    assert settings.require_algorand_addresses is True
    assert settings.log_level == "INFO"


def test_from_env(monkeypatch):
    monkeypatch.setattr("certificate_registry.config.load_dotenv", lambda: False)
    monkeypatch.setenv("DEPLOYER", "   ")
    monkeypatch.setenv("NETWORK", "TestNet")
    monkeypatch.setenv("SMOKE_TEST", "no")
    monkeypatch.setenv("REQUIRE_ALGORAND_ADDRESSES", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.deployer_mnemonic is None
    assert settings.network == "testnet"
    assert settings.smoke_test is False
    assert settings.require_algorand_addresses is False
    assert settings.log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="verbose")
    assert Settings(log_level=" warn ").log_level == "WARN"
