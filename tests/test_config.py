import pytest
from pydantic import ValidationError

from preiposip.config import Settings


def test_settings_requires_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_loads_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@localhost/db")
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("SEED_PASSWORD", "s3cret")
    s = Settings(_env_file=None)
    assert s.database_url == "postgresql+asyncpg://u:p@localhost/db"
    assert s.app_env == "production"
    assert s.seed_password == "s3cret"
    assert s.app_name == "PreIPOsip Seed"


def test_settings_defaults(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@localhost/db")
    for name in ("DATABASE_URL_DIRECT", "APP_ENV", "BCRYPT_ROUNDS", "SEED_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.database_url_direct is None
    assert s.app_env == "local"
    assert s.seed_password == "password"
    assert s.bcrypt_rounds == 12
    assert s.genesis_balance_paise == 1_000_000_000
    assert s.ledger_tolerance_paise == 100
    assert s.log_level == "INFO"


def test_settings_env_names_are_case_insensitive(monkeypatch):
    monkeypatch.setenv("database_url", "postgresql+asyncpg://u:p@localhost/db")
    monkeypatch.setenv("Ledger_Tolerance_Paise", "250")
    s = Settings(_env_file=None)
    assert s.ledger_tolerance_paise == 250
