"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from arrest_calculator.core.types import EngineConfig


class Settings(BaseSettings):
    """Environment-driven settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    max_sentence_days: float = 25
    max_impound_days: float = 14
    max_suspension_days: float = 30
    parole_violation_definition: str = "Parole Violation"

    content_delivery_network: str | None = None
    penal_code_path: str = "data/penal_code.json"
    additions_path: str = "data/additions.json"

    def engine_config(self) -> EngineConfig:
        return EngineConfig(
            max_sentence_days=self.max_sentence_days,
            max_impound_days=self.max_impound_days,
            max_suspension_days=self.max_suspension_days,
            parole_violation_definition=self.parole_violation_definition,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
