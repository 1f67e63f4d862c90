"""Ordered log of the corrections and violations reported during a fix."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

MessageLevel = Literal["info", "warning", "error"]


class Message(BaseModel):
    """A single reported message."""

    model_config = ConfigDict(frozen=True)

    level: MessageLevel
    text: str

    def __str__(self) -> str:
        return f"[{self.level.upper()}] {self.text}"


class MessageLog:
    """Append-only message log shared by the stages of one fix.

    An optional listener is called with every message as it is added, which
    lets front ends show progress while the pipeline runs.
    """

    def __init__(self, listener: Callable[[Message], None] | None = None) -> None:
        self._messages: list[Message] = []
        self._listener = listener

    def __iter__(self):
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def info(self, text: str) -> None:
        self._add("info", text)

    def warning(self, text: str) -> None:
        self._add("warning", text)

    def error(self, text: str) -> None:
        self._add("error", text)

    def of_level(self, level: MessageLevel) -> list[Message]:
        return [m for m in self._messages if m.level == level]

    @property
    def has_errors(self) -> bool:
        return any(m.level == "error" for m in self._messages)

    def _add(self, level: MessageLevel, text: str) -> None:
        message = Message(level=level, text=text)
        self._messages.append(message)
        logger.debug("%s: %s", level, text)
        if self._listener is not None:
            self._listener(message)
