"""Runtime configuration, env-driven.

Settings are read from HYDRAPIN_* environment variables or a .env file in
the working directory. The hydra-check binary can also be set through the
plain HYDRA_CHECK variable.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HydraPinConfig(BaseSettings):
    """hydrapin configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export HYDRA_CHECK=/opt/bin/hydra-check
        export HYDRAPIN_HYDRA_URL=https://hydra.example.org
        export HYDRAPIN_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="HYDRAPIN_",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # External tools
    hydra_check: str = Field(
        default="hydra-check",
        validation_alias=AliasChoices("HYDRAPIN_HYDRA_CHECK", "HYDRA_CHECK", "hydra_check"),
    )
    prefetch_binary: str = "nix-prefetch-url"

    # Build farm API
    hydra_url: str = "https://hydra.nixos.org"
    http_timeout: float | None = None  # seconds; None waits forever

    log_level: str = "WARNING"


# Module-level singleton, import as `from hydrapin.config import config`
config = HydraPinConfig()
