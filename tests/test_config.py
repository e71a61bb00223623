import pytest

import config


def test_mask_sensitive_data_redacts_secret_strings():
    data = {"d1_api_token": "abc", "password": "pw", "name": "records", "port": 1}

    masked = config.mask_sensitive_data(data)

    assert masked == {
        "d1_api_token": "***REDACTED***",
        "password": "***REDACTED***",
        "name": "records",
        "port": 1,
    }
    assert data["d1_api_token"] == "abc"


def test_d1_config_is_read_from_environment(monkeypatch):
    monkeypatch.setenv("D1_ACCOUNT_ID", "account")
    monkeypatch.setenv("D1_DATABASE_ID", "database")
    monkeypatch.setenv("D1_API_TOKEN", "token")

    assert config.get_d1_config_from_env() == {
        "d1_account_id": "account",
        "d1_database_id": "database",
        "d1_api_token": "token",
    }


def test_missing_d1_config_raises(monkeypatch):
    monkeypatch.setenv("D1_ACCOUNT_ID", "account")
    monkeypatch.delenv("D1_DATABASE_ID", raising=False)
    monkeypatch.delenv("D1_API_TOKEN", raising=False)

    with pytest.raises(ValueError, match="D1_DATABASE_ID, D1_API_TOKEN"):
        config.get_d1_config_from_env()


def test_setup_logging_accepts_level_names():
    config.setup_logging("debug")
