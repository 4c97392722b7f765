"""Chat dispatch with connection tracking and a stale-response guard."""

import asyncio
import logging
from typing import Optional, Sequence

from ..core.api_client import AssistantAPIClient, get_api_client
from ..core.config import get_settings
from ..core.errors import DispatchFailed, StaleResponse
from ..schemas.attachments import Attachment
from ..schemas.backend import ChatRequest
from ..schemas.conversations import ConnectionState
from ..schemas.turns import Turn
from .session import ConversationSession
from .turn_builder import build_agent_turn, build_error_turn

logger = logging.getLogger(__name__)


class DispatchController:
    """Send user turns to the reasoning service, one visible result per send.

    Every ``send`` takes the next dispatch sequence number. When the response
    arrives, it is only applied if that number is still the latest one;
    otherwise ``StaleResponse`` is raised and neither the session nor the
    failure counter is touched. ``invalidate`` bumps the sequence without
    sending, which is how a reset orphans an in-flight request.

    Failures are never retried automatically. Each one yields a single error
    turn; the user re-triggers by picking a suggestion or typing again.
    """

    def __init__(
        self,
        session: ConversationSession,
        client: Optional[AssistantAPIClient] = None,
        failure_threshold: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self._session = session
        self._client = client or get_api_client()
        self.failure_threshold = (
            failure_threshold if failure_threshold is not None else settings.retry_warning_threshold
        )
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self.failure_count = 0
        self._sequence = 0

    @property
    def sequence(self) -> int:
        return self._sequence

    def invalidate(self) -> None:
        """Orphan whatever dispatch is currently in flight."""
        self._sequence += 1

    def _ensure_current(self, sequence: int) -> None:
        if sequence != self._sequence:
            raise StaleResponse(sequence, self._sequence)

    async def send(
        self,
        turn: Turn,
        session_id: Optional[str],
        attachments: Sequence[Attachment] = (),
    ) -> Turn:
        """
        Dispatch a user turn and return the agent turn to append.

        Returns a synthetic error turn on failure (including timeout).
        Raises ``StaleResponse`` if a newer dispatch or a reset happened
        while this one was in flight.
        """
        self._sequence += 1
        sequence = self._sequence
        self._session.connection_state = ConnectionState.CONNECTING

        request = ChatRequest(
            message=turn.content,
            conversation_id=session_id,
            documents=[a.to_document_context() for a in attachments],
        )

        try:
            async with asyncio.timeout(self.timeout):
                data = await self._client.chat(request)
        except (DispatchFailed, TimeoutError) as exc:
            self._ensure_current(sequence)
            self._session.connection_state = ConnectionState.DEGRADED
            self.failure_count += 1
            logger.warning(
                "Dispatch %d failed (%d in a row): %s",
                sequence,
                self.failure_count,
                str(exc) or "timed out",
            )
            return build_error_turn(self.failure_count, self.failure_threshold)

        self._ensure_current(sequence)
        self._session.connection_state = ConnectionState.CONNECTED
        self.failure_count = 0
        if data.conversation_id:
            self._session.set_session_id(data.conversation_id)
        return build_agent_turn(data)
