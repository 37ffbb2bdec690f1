"""ethoscompare Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
Values come from defaults and ``ETHOSCOMPARE_`` environment variables with
``__`` as the nested delimiter, e.g. ``ETHOSCOMPARE_API__ETHOS__TIMEOUT=3``.
A TOML file loaded with ``from_toml_file`` takes precedence over the
environment for the keys it sets.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ethoscompare.config.models.api_settings import APISettings
from ethoscompare.config.models.app_settings import AppSettings, LoggingSettings
from ethoscompare.config.models.cache_settings import CacheSettings
from ethoscompare.config.models.search_settings import ResolverSettings, SearchSettings


class Settings(BaseSettings):
    """Settings facade providing unified configuration access."""

    model_config = SettingsConfigDict(
        env_prefix="ETHOSCOMPARE_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    resolver: ResolverSettings = Field(default_factory=ResolverSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from a TOML file; the environment fills the keys it omits."""
        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config: dict[str, Any] = toml.load(file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(exclude_none=True)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)
