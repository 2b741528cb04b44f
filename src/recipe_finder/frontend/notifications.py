"""Notification channel: one message at a time with timed auto-clear.

Message kinds are a closed enum; each kind carries the prefix that renders
it, so there is no string-keyed lookup to fall out of sync.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import TYPE_CHECKING, Final


if TYPE_CHECKING:
    from collections.abc import Callable


DEFAULT_TIMEOUT: Final[float] = 0.75


class NotificationKind(Enum):
    """Notification variants and the prefix each one is rendered with."""

    SUCCESS = ("success", "✅")
    ERROR = ("error", "❌")
    WARNING = ("warning", "⚠️")
    INFO = ("info", "ℹ️")

    def __init__(self, tag: str, prefix: str) -> None:
        self.tag = tag
        self.prefix = prefix

    @classmethod
    def parse(cls, tag: str) -> NotificationKind:
        """Look a kind up by tag.

        Raises:
            ValueError: If ``tag`` names no kind.
        """
        for kind in cls:
            if kind.tag == tag:
                return kind
        msg = f"Unknown notification kind: {tag!r}"
        raise ValueError(msg)

    def render(self, message: str) -> str:
        return f"{self.prefix} {message}"


class NotificationChannel:
    """Holds the current message and clears it once its deadline passes.

    Time is read from ``clock`` (monotonic seconds) so expiry can be driven
    explicitly; reading :attr:`message` after the deadline returns "".
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.timeout = timeout
        self._clock = clock
        self._message = ""
        self._deadline: float | None = None

    def show(self, message: str, timeout: float | None = None) -> None:
        """Show a plain message, replacing any current one."""
        self._message = message
        self._deadline = self._clock() + (self.timeout if timeout is None else timeout)

    def notify(self, kind: NotificationKind, message: str) -> None:
        self.show(kind.render(message))

    def success(self, message: str) -> None:
        self.notify(NotificationKind.SUCCESS, message)

    def error(self, message: str) -> None:
        self.notify(NotificationKind.ERROR, message)

    def warning(self, message: str) -> None:
        self.notify(NotificationKind.WARNING, message)

    def info(self, message: str) -> None:
        self.notify(NotificationKind.INFO, message)

    def clear(self) -> None:
        self._message = ""
        self._deadline = None

    def _expire(self) -> None:
        if self._deadline is not None and self._clock() >= self._deadline:
            self.clear()

    @property
    def message(self) -> str:
        """The current message, or "" once it has faded out."""
        self._expire()
        return self._message

    @property
    def has_message(self) -> bool:
        return self.message != ""

    @property
    def has_timeout(self) -> bool:
        """Whether a fade-out is pending."""
        self._expire()
        return self._deadline is not None

    @property
    def kind(self) -> NotificationKind | None:
        """Kind of the current message, None for plain messages."""
        message = self.message
        for kind in NotificationKind:
            if message.startswith(kind.prefix):
                return kind
        return None
