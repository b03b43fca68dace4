"""Thread-safe in-memory store for projection workflow sessions.

Each session wraps one WorkflowContext. The store is bounded: once
max_sessions is reached, the least recently used session is evicted.
Nothing is persisted.
"""
import logging
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from risk_projection import WorkflowContext

log = logging.getLogger(__name__)


@dataclass
class ProjectionSession:
    """A workflow context addressable by session id."""

    context: WorkflowContext
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    last_accessed: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SessionStore:
    """Thread-safe, bounded in-memory registry of projection sessions."""

    def __init__(self, max_sessions: int = 500):
        """Initialize the session store.

        Args:
            max_sessions: Maximum number of sessions kept before the least
                recently used one is evicted.
        """
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, ProjectionSession] = OrderedDict()
        self._lock = threading.Lock()
        self._stats = {
            "total_created": 0,
            "total_evicted": 0,
            "total_analyses": 0,
            "fallbacks": 0,
        }

    def create(self, health_snapshot: dict[str, Any], user_id: Optional[str] = None) -> ProjectionSession:
        """Open a new session for a health snapshot.

        Args:
            health_snapshot: The user's prior health record.
            user_id: Explicit user id; derived from the snapshot profile when omitted.

        Returns:
            The created session.
        """
        session = ProjectionSession(
            context=WorkflowContext(health_snapshot=dict(health_snapshot), user_id=user_id or "")
        )
        with self._lock:
            self._sessions[session.id] = session
            self._stats["total_created"] += 1
            while len(self._sessions) > self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                self._stats["total_evicted"] += 1
                log.info(f"[SESSIONS] Evicted session {evicted_id}")
        log.debug(f"[SESSIONS] Created session {session.id} for {session.context.user_id}")
        return session

    def get(self, session_id: str) -> Optional[ProjectionSession]:
        """Look up a session, marking it as recently used."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                session.last_accessed = datetime.now(timezone.utc)
                self._sessions.move_to_end(session_id)
            return session

    def delete(self, session_id: str) -> bool:
        """Drop a session. Returns False when it did not exist."""
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def record_analysis(self, used_fallback: bool) -> None:
        """Count a finished analysis for the stats endpoint."""
        with self._lock:
            self._stats["total_analyses"] += 1
            if used_fallback:
                self._stats["fallbacks"] += 1

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with store statistics.
        """
        with self._lock:
            return {
                **self._stats,
                "active_sessions": len(self._sessions),
                "max_sessions": self.max_sessions,
            }

    def clear(self) -> None:
        """Remove all sessions."""
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
