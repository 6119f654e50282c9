from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str
    database_url_direct: str | None = None

    # Seeding
    app_env: str = "local"
    seed_password: str = "password"
    bcrypt_rounds: int = 12

    # Ledger (amounts in paise)
    genesis_balance_paise: int = 1_000_000_000
    ledger_tolerance_paise: int = 100

    # App
    app_name: str = "PreIPOsip Seed"
    log_level: str = "INFO"


settings = Settings()
