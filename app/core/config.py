"""Application configuration."""
from pathlib import Path

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatcherConfig(BaseModel):
    """Tunable constants for speech-to-order matching."""

    # Score below which a search hit is accepted without sub-phrase search
    strong_match_threshold: float = 0.3
    # Highest score still accepted as a match
    acceptance_threshold: float = 0.5
    # Score bonus per token for longer sub-phrases
    length_bonus: float = 0.02
    # Raw per-field distance ratio beyond which a field does not match
    field_match_threshold: float = 0.4
    score_exponent: float = 0.5
    name_weight: float = 0.7
    description_weight: float = 0.3
    max_alternatives: int = 3
    max_modifier_window: int = 4

    @model_validator(mode="after")
    def check_thresholds(self) -> "MatcherConfig":
        if self.strong_match_threshold > self.acceptance_threshold:
            raise ValueError("strong_match_threshold must not exceed acceptance_threshold")
        if self.name_weight <= 0 or self.description_weight < 0:
            raise ValueError("field weights must be positive")
        return self


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Restaurant
    restaurant_name: str = "Restaurant"
    default_restaurant_key: str = "default"

    # Menus
    menus_dir: Path = Path(__file__).resolve().parent.parent / "services" / "menu" / "data"

    # Matching
    matcher: MatcherConfig = MatcherConfig()

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
    )


settings = Settings()
