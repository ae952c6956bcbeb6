"""
Dirsize settings
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class DirsizeSettings(BaseSettings):
    """Settings read from DIRSIZE_* environment variables or .env"""

    model_config = SettingsConfigDict(
        env_prefix="DIRSIZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Require a "/" after the matched prefix before treating a root as already counted
    strict_prefix_boundary: bool = False

    # CLI logging
    log_level: str = "WARNING"

    # Backend arguments used when none are given on the command line
    default_args: str = ""


@lru_cache(maxsize=1)
def get_settings() -> DirsizeSettings:
    return DirsizeSettings()
