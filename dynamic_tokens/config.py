"""Process configuration.

Values here seed the defaults of the world settings registered on ``init``
(see :mod:`dynamic_tokens.settings`). They are read from the environment
(``DYNAMIC_TOKENS_*``) or a ``.env`` file and validated on load, so a bad
value fails here rather than inside a hook.
"""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

from dynamic_tokens.types import ResolutionStrategy


class Settings(BaseSettings):
    """Module configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DYNAMIC_TOKENS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Tracked attribute
    attribute_path: str = "system.attributes.hp"

    # Threshold matching
    resolution: ResolutionStrategy = ResolutionStrategy.ASCENDING

    # Logging
    log_level: str = "INFO"


def configure_logging(level: str) -> None:
    """Configure root logging for scripts and the preview app."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


settings = Settings()
