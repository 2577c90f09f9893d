"""In-process SessionChecker — answers "does this vote session exist?" for other aggregates.

Invariants:
    - Existence is a row-count probe: a stored row counts even when it would
      fail rehydration
"""

import logging
from uuid import UUID

from voting.core.repository_protocols import VoteSessionRepository


class InProcessSessionChecker:
    """SessionChecker backed by a VoteSessionRepository in the same process."""

    def __init__(
        self, sessions: VoteSessionRepository, logger: logging.Logger | None = None,
    ):
        self._sessions = sessions
        self._logger = logger or logging.getLogger(__name__)

    async def exists(self, session_id: UUID) -> bool:
        found = await self._sessions.exists(session_id)
        if not found:
            self._logger.debug(
                f"vote session {session_id} not found",
                extra={"operation": "session_exists", "entity_id": str(session_id)},
            )
        return found
