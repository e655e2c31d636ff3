from __future__ import annotations

import threading

from .loop import RefinementSession, SessionError, SessionState

MAX_FINISHED = 100


class SessionNotFoundError(SessionError, KeyError):
    pass


class SessionStore:
    """Process-local session map. Nothing survives a restart.

    Finished sessions are kept until their final payload is taken (``drop``)
    or until more than ``max_finished`` of them pile up, oldest first.
    """

    def __init__(self, max_finished: int = MAX_FINISHED) -> None:
        self._sessions: dict[str, RefinementSession] = {}
        self._lock = threading.Lock()
        self.max_finished = max_finished

    def add(self, session: RefinementSession) -> RefinementSession:
        with self._lock:
            self._evict_finished()
            self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> RefinementSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def drop(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def _evict_finished(self) -> None:
        finished = [
            sid for sid, s in self._sessions.items() if s.state is SessionState.DONE
        ]
        # dicts keep insertion order, so the oldest finished go first
        for sid in finished[: max(0, len(finished) - self.max_finished)]:
            del self._sessions[sid]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
