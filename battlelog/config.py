"""
Battlelog - Configuration

Loads settings from environment variables (or a local .env file) with
Pydantic validation. Variable names match the ones the battle logger has
always used: APIKEY, PLAYERTAG, DB_PATH, API_BASE_URL.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from .exceptions import ConfigurationError

DEFAULT_API_BASE_URL = "https://api.clashroyale.com"


def normalize_player_tag(tag: str) -> str:
    """Upper-case a player tag and make sure it starts with '#'."""
    tag = (tag or "").strip().upper()
    if not tag:
        return ""
    if not tag.startswith("#"):
        tag = "#" + tag
    return tag


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ─── Clash Royale API ───
    api_key: str = Field("", validation_alias=AliasChoices("APIKEY", "api_key"))
    api_base_url: str = Field(
        DEFAULT_API_BASE_URL, validation_alias=AliasChoices("API_BASE_URL", "api_base_url")
    )
    request_timeout: float = Field(
        30.0, validation_alias=AliasChoices("REQUEST_TIMEOUT", "request_timeout")
    )

    # ─── Player ───
    player_tag: str = Field("", validation_alias=AliasChoices("PLAYERTAG", "player_tag"))
    target_trophies: int = Field(
        7000, validation_alias=AliasChoices("TARGET_TROPHIES", "target_trophies")
    )

    # ─── Storage ───
    db_path: str = Field("battles.db", validation_alias=AliasChoices("DB_PATH", "db_path"))

    # ─── App ───
    log_level: str = Field("INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("player_tag")
    @classmethod
    def _normalize_player_tag(cls, value: str) -> str:
        return normalize_player_tag(value)

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(
                "APIKEY is not set. Create a key at https://developer.clashroyale.com "
                "and add APIKEY=<key> to your .env file."
            )
        return self.api_key

    def require_player_tag(self) -> str:
        if len(self.player_tag) < 2:
            raise ConfigurationError(
                "PLAYERTAG is not set. Add your Clash Royale player tag to .env "
                "(e.g. PLAYERTAG=#ABC123) or pass --tag."
            )
        return self.player_tag


@lru_cache()
def get_settings() -> Settings:
    return Settings()
