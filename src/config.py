"""Centralised application settings loaded from environment / .env file."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Driver payout
    platform_fee: float = 1.65  # USD withheld per driven trip
    driver_payout_share: float = 0.80  # fraction paid to the driver

    # Logging
    log_level: str = "INFO"

    # API
    rate_limit: str = "100/minute"
    seed_on_startup: bool = True  # load seed.py sample data into the app

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
