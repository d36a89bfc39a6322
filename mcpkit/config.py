"""Runtime configuration, env-driven via pydantic-settings.

Reads from a .env file and MCPKIT_* environment variables.  Every loader
component accepts an explicit ``KitConfig`` so tests never depend on the
process environment.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class KitConfig(BaseSettings):
    """Plugin loader configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export MCPKIT_BUILD_DIR=build
        export MCPKIT_EXTENSIONS='[".py", ".pyc"]'
        export MCPKIT_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MCPKIT_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Build output layout
    build_dir: str = "dist"
    extensions: list[str] = [".py"]
    extra_exclude_patterns: list[str] = []

    # Export / contract conventions
    default_export: str = "default"
    self_check_method: str = "validate"

    log_level: str = "WARNING"


# Module-level singleton, import as `from mcpkit.config import config`
config = KitConfig()
