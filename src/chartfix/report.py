"""JSON report of a fix run."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from .messages import Message, MessageLog


class FixError(BaseModel):
    """The hard error that aborted a fix."""

    code: str
    message: str


class FixReport(BaseModel):
    """Complete output of a fix run."""

    source_midi: str
    output_midi: str | None = None
    timestamp: str
    ticks_per_quarter: int = Field(..., gt=0)
    success: bool
    error: FixError | None = None
    messages: list[Message] = Field(default_factory=list)


def build_report(
    source_midi: str | Path,
    output_midi: str | Path | None,
    ticks_per_quarter: int,
    log: MessageLog,
    error: FixError | None = None,
) -> FixReport:
    return FixReport(
        source_midi=str(source_midi),
        output_midi=None if output_midi is None else str(output_midi),
        timestamp=datetime.now(timezone.utc).isoformat(),
        ticks_per_quarter=ticks_per_quarter,
        success=error is None,
        error=error,
        messages=list(log.messages),
    )
