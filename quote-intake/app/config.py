from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    api_base_url: str = "http://localhost:5000"
    default_locale: str = "en"
    request_timeout: float = 15.0
    send_confirmation: bool = True

    model_config = {
        "env_file": BASE_DIR / ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "QUOTE_INTAKE_",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
