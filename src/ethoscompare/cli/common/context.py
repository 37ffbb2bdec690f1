"""Options shared by every ethoscompare command.

The main callback parses ``--verbose``, ``--log-level`` and ``--json`` once
and stores them here; the profile, search and compare handlers read them
back to choose between rich tables and the JSON envelope.
"""

from __future__ import annotations

import contextvars
from enum import Enum

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """Accepted ``--log-level`` values."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """Parsed global options of one ethoscompare invocation.

    Attributes:
        verbose: Count of ``-v`` flags; any value above zero also prints
            session statistics after the command output
        log_level: Level of the ``ethoscompare`` logger
        json_output: Emit the JSON envelope instead of tables
    """

    verbose: int = Field(default=0, ge=0, description="Count of -v flags")
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Level of the ethoscompare logger",
    )
    json_output: bool = Field(default=False, description="Emit the JSON envelope")

    def is_verbose(self) -> bool:
        return self.verbose > 0

    def get_effective_log_level(self) -> str:
        """``-v`` wins over ``--log-level`` and turns on DEBUG."""
        return LogLevel.DEBUG.value if self.is_verbose() else self.log_level.value


cli_context_var: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "ethoscompare_cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """Options of the running command; defaults when no callback ran."""
    return cli_context_var.get() or CliContext()


def set_cli_context(context: CliContext) -> None:
    cli_context_var.set(context)


def clear_cli_context() -> None:
    cli_context_var.set(None)
