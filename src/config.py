from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Engine
    # Balance at or below this is treated as paid off (currency units)
    payoff_threshold: Decimal = Decimal("0.005")

    # Input parsing
    min_year: int = 1900
    max_year: int = 3000
    max_term_years: int = 50


settings = Settings()
