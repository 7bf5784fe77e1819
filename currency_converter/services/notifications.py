"""User-facing notifications (toasts).

The view only ever pushes; the UI router drains the outbox while rendering so
each notification is shown exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol

SEVERITIES = ("info", "destructive")


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    severity: str = "info"

    def __post_init__(self) -> None:
        if self.severity not in SEVERITIES:
            raise ValueError(f"unknown severity '{self.severity}'")


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class NotificationOutbox:
    def __init__(self) -> None:
        self._pending: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self._pending.append(notification)

    def drain(self) -> List[Notification]:
        pending, self._pending = self._pending, []
        return pending

    def __len__(self) -> int:
        return len(self._pending)
