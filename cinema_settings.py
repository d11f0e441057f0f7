# Runtime configuration, read from CINEMA_* environment variables or a .env file.

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='CINEMA_',
        env_file='.env',
        env_ignore_empty=True,
        extra='ignore',
    )

    # Storage
    database_url: str = 'sqlite:///cinema.db'
    seed_csv: Path = Path('Screens.csv')
    input_log: Path = Path('user_input.txt')
    reset_basket_on_start: bool = True  # The basket starts empty every session

    # Logging
    log_file: Path = Path('cinema.log')
    log_level: str = 'INFO'

    # Attempts allowed at typing a seat position before the booking is dropped (0 = no limit)
    seat_prompt_limit: int = 5

    @field_validator('log_level', mode='before')
    @classmethod
    def normalise_level(cls, v):
        return str(v).upper()

    @field_validator('seat_prompt_limit')
    @classmethod
    def non_negative_limit(cls, v):
        if v < 0:
            raise ValueError('seat_prompt_limit cannot be negative')
        return v


@lru_cache
def get_settings():
    return Settings()
