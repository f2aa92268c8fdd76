"""Operator settings read from the environment."""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Logging settings. The generated value's bound is not configurable."""

    model_config = ConfigDict(env_prefix="SECURERAND_")

    # Logging goes to stderr only; stdout carries the value
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


settings = Settings()
