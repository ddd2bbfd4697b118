from __future__ import annotations

import logging
import random
import threading
import uuid
from collections import OrderedDict
from contextlib import contextmanager
from typing import Iterator, Optional

from config import QUIZ_MAX_SESSIONS
from quiz import QuizSession

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    pass


class SessionStore:
    """
    In-memory sessions keyed by an opaque id, one per client.
    Nothing is shared between sessions; each owns its own RNG.
    """

    def __init__(self, max_sessions: int = QUIZ_MAX_SESSIONS):
        self.max_sessions = max(1, max_sessions)
        self._sessions: "OrderedDict[str, QuizSession]" = OrderedDict()
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, seed: Optional[int] = None) -> str:
        rng = random.Random(seed) if seed is not None else random.Random()
        session_id = uuid.uuid4().hex
        with self._lock:
            while len(self._sessions) >= self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("session store full; evicted %s", evicted)
            self._sessions[session_id] = QuizSession(rng=rng)
        return session_id

    def get(self, session_id: str) -> QuizSession:
        with self._lock:
            try:
                return self._sessions[session_id]
            except KeyError:
                raise SessionNotFound(session_id) from None

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFound(session_id)

    @contextmanager
    def checkout(self, session_id: str) -> Iterator[QuizSession]:
        # sync endpoints run in a threadpool; one operation at a time
        with self._lock:
            yield self.get(session_id)


store = SessionStore()
