import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DRAFTDECK_")

    app_name: str = "DraftDeck"
    debug: bool = False
    log_level: str = "INFO"

    default_deck_size: int = 60

    # Multi-set products; their exports are ordered by set, then collector number
    expansion_set_codes: list[str] = ["cube", "chaos"]

    # Seed for normalization shuffles when a request does not supply one
    random_seed: int | None = None


settings = Settings()


def configure_logging() -> None:
    """Set the root log level from settings."""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
