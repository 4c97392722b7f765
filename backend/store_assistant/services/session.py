"""In-memory conversation session for one store manager."""

import logging
from typing import Optional

from ..schemas.attachments import Attachment, AttachmentState
from ..schemas.conversations import ConfirmationRequest, ConnectionState
from ..schemas.turns import Turn
from .turn_builder import build_welcome_turn

logger = logging.getLogger(__name__)


class ConversationSession:
    """Ordered turns, staged attachments and the outstanding confirmation.

    ``append`` is the only way turns enter the session, and every append
    supersedes any pending confirmation. The session performs no I/O; the
    owning controller decides when to talk to the backend.
    """

    def __init__(self) -> None:
        self.session_id: Optional[str] = None
        self.connection_state = ConnectionState.CONNECTED
        self.pending_confirmation: Optional[ConfirmationRequest] = None
        self._turns: list[Turn] = []
        self._turn_ids: set[str] = set()
        self._attachments: dict[str, Attachment] = {}

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def attachments(self) -> list[Attachment]:
        """Attachments staged for the next outgoing turn, in staging order."""
        return list(self._attachments.values())

    @property
    def last_turn(self) -> Optional[Turn]:
        return self._turns[-1] if self._turns else None

    def append(self, turn: Turn) -> Turn:
        """Append a turn to the end of the conversation."""
        if turn.id in self._turn_ids:
            raise ValueError(f"Turn {turn.id} is already in the conversation")
        self._turns.append(turn)
        self._turn_ids.add(turn.id)
        self.pending_confirmation = None
        return turn

    def reset(self) -> Optional[str]:
        """Start over with a fresh welcome turn; return the previous session id.

        The connection label goes back to connected: a dispatch orphaned by
        the reset never reports back.
        """
        previous = self.session_id
        self.session_id = None
        self.connection_state = ConnectionState.CONNECTED
        self.pending_confirmation = None
        self._turns.clear()
        self._turn_ids.clear()
        self._attachments.clear()
        self.append(build_welcome_turn(fresh=True))
        if previous:
            logger.info("Reset conversation %s", previous)
        return previous

    def set_session_id(self, session_id: Optional[str]) -> None:
        if session_id != self.session_id:
            logger.info("Conversation id changed from %s to %s", self.session_id, session_id)
        self.session_id = session_id

    def set_pending_confirmation(self, request: Optional[ConfirmationRequest]) -> None:
        """Record (or clear) the confirmation demanded by the latest agent turn."""
        if request is not None:
            last = self.last_turn
            if last is None or last.id != request.turn_id or not last.requires_confirmation:
                raise ValueError("A confirmation request must belong to the most recent agent turn")
        self.pending_confirmation = request

    def stage_attachment(self, attachment: Attachment) -> None:
        if attachment.state != AttachmentState.ANALYZED:
            raise ValueError(f"Attachment {attachment.id} is {attachment.state}, not analyzed")
        self._attachments[attachment.id] = attachment

    def remove_attachment(self, attachment_id: str) -> Attachment:
        """Unstage an attachment or raise KeyError if it is not staged."""
        attachment = self._attachments.pop(attachment_id, None)
        if attachment is None:
            raise KeyError(f"Attachment {attachment_id} not found")
        return attachment

    def take_attachments(self) -> list[Attachment]:
        """Hand over every staged attachment and clear the staging area."""
        taken = list(self._attachments.values())
        self._attachments.clear()
        return taken
