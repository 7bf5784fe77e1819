"""In-memory registry of converter sessions.

One `ConversionView` per browser, keyed by the id stored in the session
cookie. Bounded: once `max_sessions` is reached the least recently used
session is dropped. Restarting the process clears everything.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from currency_converter.core.config import Settings
from currency_converter.services.conversion_view import ConversionView
from currency_converter.services.notifications import NotificationOutbox
from currency_converter.services.rates.base import RateFetcher

logger = logging.getLogger("converter.sessions")


@dataclass
class Session:
    id: str
    view: ConversionView
    outbox: NotificationOutbox


SessionFactory = Callable[[str], Session]


class SessionRegistry:
    def __init__(self, session_factory: SessionFactory, max_sessions: int = 1000):
        if max_sessions <= 0:
            raise ValueError("max_sessions must be positive")
        self._factory = session_factory
        self._max = max_sessions
        self._sessions: "OrderedDict[str, Session]" = OrderedDict()

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def create(self) -> Session:
        session = self._factory(uuid.uuid4().hex)
        self._sessions[session.id] = session
        while len(self._sessions) > self._max:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("evicted session %s", evicted)
        return session

    def get_or_create(self, session_id: Optional[str]) -> Tuple[Session, bool]:
        session = self.get(session_id)
        if session is not None:
            return session, False
        return self.create(), True

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions


def build_session_registry(settings: Settings, fetcher: RateFetcher) -> SessionRegistry:
    def factory(session_id: str) -> Session:
        outbox = NotificationOutbox()
        view = ConversionView(
            fetcher,
            outbox,
            amount=settings.default_amount,
            source=settings.default_source,
            destination=settings.default_destination,
        )
        return Session(id=session_id, view=view, outbox=outbox)

    return SessionRegistry(factory, max_sessions=settings.max_sessions)
