"""
Configuration management for generatebp.

Provides centralized, type-safe configuration with environment variable overrides
and sensible defaults for the generation pass.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()

DEFAULT_MIN_SDK_VERSION = 14
DEFAULT_TARGET_SDK_VERSION = 34


class Config(BaseModel):
    """Root configuration for generatebp."""

    project_name: str | None = Field(
        default=None,
        min_length=1,
        description="Root project name, used as the vendored module name prefix",
    )
    project_dir: Path = Field(
        default=Path("."), description="Module directory holding Android.bp and libs/"
    )
    default_target_sdk: int = Field(
        default=DEFAULT_TARGET_SDK_VERSION, ge=1, description="Target SDK when a manifest has none"
    )
    default_min_sdk: int = Field(
        default=DEFAULT_MIN_SDK_VERSION, ge=1, description="Minimum SDK when a manifest has none"
    )
    libs_dir_name: str = Field(default="libs", description="Staging directory under project_dir")
    blueprint_name: str = Field(default="Android.bp", description="Module descriptor file name")
    platform_catalog: Path | None = Field(
        default=None, description="JSON catalog of modules already available in AOSP"
    )
    debug: bool = Field(default=False, description="Log skip decisions")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )

    model_config = {"extra": "ignore"}

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug switch."""
        return "DEBUG" if self.debug else self.log_level

    @property
    def libs_dir(self) -> Path:
        """Directory the vendored artifacts are staged into."""
        return self.project_dir / self.libs_dir_name

    @property
    def blueprint_path(self) -> Path:
        """Top-level module descriptor whose static_libs region is regenerated."""
        return self.project_dir / self.blueprint_name

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        catalog = os.environ.get("GENERATEBP_PLATFORM_CATALOG")
        return cls(
            project_name=os.environ.get("GENERATEBP_PROJECT_NAME") or None,
            project_dir=Path(os.environ.get("GENERATEBP_PROJECT_DIR", ".")),
            default_target_sdk=int(
                os.environ.get("GENERATEBP_TARGET_SDK", str(DEFAULT_TARGET_SDK_VERSION))
            ),
            default_min_sdk=int(
                os.environ.get("GENERATEBP_MIN_SDK", str(DEFAULT_MIN_SDK_VERSION))
            ),
            platform_catalog=Path(catalog) if catalog else None,
            debug=os.environ.get("GENERATEBP_DEBUG", "false").lower() == "true",
            log_level=os.environ.get("GENERATEBP_LOG_LEVEL", "INFO"),  # type: ignore
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
