"""Application and logging configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ethoscompare.shared.constants import CLIDefaults, CLIHelp


class AppSettings(BaseModel):
    """Application configuration."""

    name: str = Field(default=CLIHelp.APP_NAME, description="Application name")
    version: str = Field(default=CLIDefaults.VERSION, description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    share_page_url: str = Field(
        default=CLIDefaults.SHARE_PAGE_URL,
        description="Comparison page URL embedded in share links",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON-lines log file")
    rich_console: bool = Field(default=True, description="Use Rich console output")


__all__ = ["AppSettings", "LoggingSettings"]
