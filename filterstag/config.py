"""Engine configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings, overridable through FILTERSTAG_* environment variables."""

    # Codec settings
    ENCODE_FORMAT: str = "PNG"  # Default format for encode() and previews
    MAX_IMAGE_PIXELS: int = 8192 * 8192  # Larger decoded images are rejected

    # Logging
    LOG_LEVEL: str = "WARNING"  # Applied by the command line driver

    model_config = {"env_prefix": "FILTERSTAG_"}


settings = Settings()
