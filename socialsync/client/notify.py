"""Transient user notifications (toasts) for write-path outcomes."""
from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from ..config import get_client_settings

logger = logging.getLogger(__name__)


class ToastLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Toast:
    level: ToastLevel
    message: str
    created_at: float


class Notifier(Protocol):
    def success(self, message: str) -> None:
        """Show a short confirmation to the user."""
        ...

    def error(self, message: str) -> None:
        """Show a short, non-fatal failure notice to the user."""
        ...


class ToastQueue(Notifier):
    """Bounded queue of toasts waiting to be shown by the view layer."""

    def __init__(self, maxlen: int | None = None) -> None:
        self._toasts: deque[Toast] = deque(maxlen=maxlen or get_client_settings().toast_history)

    def _push(self, level: ToastLevel, message: str) -> None:
        self._toasts.append(Toast(level=level, message=message, created_at=time.monotonic()))

    def success(self, message: str) -> None:
        logger.info("Toast: %s", message)
        self._push(ToastLevel.SUCCESS, message)

    def error(self, message: str) -> None:
        logger.warning("Toast: %s", message)
        self._push(ToastLevel.ERROR, message)

    def drain(self) -> list[Toast]:
        """Return pending toasts oldest first and clear the queue."""
        toasts = list(self._toasts)
        self._toasts.clear()
        return toasts

    def __len__(self) -> int:
        return len(self._toasts)


__all__ = ["Notifier", "Toast", "ToastLevel", "ToastQueue"]
