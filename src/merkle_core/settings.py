from __future__ import annotations
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    log_level: str = Field(default="WARNING", alias="MERKLE_LOG_LEVEL")

    # Used to read --input-file and to decode leaf data for JSON output
    input_encoding: str = Field(default="utf-8", alias="MERKLE_INPUT_ENCODING")

    pretty: bool = Field(default=False, alias="MERKLE_PRETTY")

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()  # load at import
