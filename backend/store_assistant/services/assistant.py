"""Store assistant controller.

Owns one ``ConversationSession`` and drives the attachment pipeline, the
dispatch controller and the confirmation state machine for it. This is the
only object that appends turns.
"""

import asyncio
import logging
from typing import Coroutine, Optional

from ..core.api_client import AssistantAPIClient, get_api_client
from ..core.config import Settings, get_settings
from ..core.errors import StaleResponse, UploadFailed
from ..data.prompts import QUICK_START_QUERIES
from ..schemas.actions import ActionProposal
from ..schemas.attachments import Attachment, LocalFile
from ..schemas.conversations import QuickStartQuery, SessionSnapshot
from ..schemas.turns import Turn
from .action_router import follow_up_message
from .attachment_pipeline import AttachmentPipeline
from .confirmation import ConfirmationStateMachine
from .dispatch import DispatchController
from .session import ConversationSession
from .turn_builder import (
    build_analysis_turn,
    build_upload_error_turn,
    build_user_turn,
    build_welcome_turn,
)

logger = logging.getLogger(__name__)


class StoreAssistant:
    """One store manager's assistant conversation.

    Usage:
        assistant = StoreAssistant()
        await assistant.attach(LocalFile(name="invoice.pdf", mime_type="application/pdf", content=raw))
        turns = await assistant.send_message("Create a purchase order from this bill")
    """

    def __init__(
        self,
        client: Optional[AssistantAPIClient] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self._client = client or get_api_client()
        self.session = ConversationSession()
        self.confirmation = ConfirmationStateMachine(self.session)
        self.dispatcher = DispatchController(
            self.session,
            self._client,
            failure_threshold=settings.retry_warning_threshold,
            timeout=settings.request_timeout_seconds,
        )
        self.pipeline = AttachmentPipeline(
            self._client,
            allowed_types=settings.allowed_attachment_types,
            max_bytes=settings.max_attachment_bytes,
        )
        self._upload_generation = 0
        self._background: set[asyncio.Task] = set()

        self.session.append(build_welcome_turn())

    # ── Sending ──────────────────────────────────────────────────────

    async def send_message(self, text: str) -> list[Turn]:
        """
        Send typed text (plus any staged documents) as one user turn.

        Returns the turns this call appended: the user turn, followed by the
        agent or error turn unless the response went stale. Raises
        ``ValueError`` when there is neither text nor a staged document.
        """
        turn = build_user_turn(text, self.session.attachments)
        attachments = self.session.take_attachments()
        self.session.append(turn)

        try:
            reply = await self.dispatcher.send(turn, self.session.session_id, attachments)
        except StaleResponse as exc:
            logger.debug("%s", exc)
            return [turn]

        self.session.append(reply)
        self.confirmation.observe(reply)
        return [turn, reply]

    async def choose_action(self, proposal: ActionProposal) -> list[Turn]:
        """Act on a follow-up button; returns the appended turns (empty for a no-op)."""
        if proposal.is_confirmation:
            message = self.confirmation.resolve(proposal)
        else:
            message = follow_up_message(proposal)
        if message is None:
            return []
        return await self.send_message(message)

    # ── Attachments ──────────────────────────────────────────────────

    async def attach(self, file: LocalFile) -> Optional[Attachment]:
        """
        Validate, upload and stage a document for the next turn.

        ``UnsupportedType`` and ``TooLarge`` propagate before anything is
        uploaded. An upload failure becomes an error turn and returns None,
        as does an upload that finishes after the conversation was cleared.
        """
        self.pipeline.validate(file)
        generation = self._upload_generation

        try:
            attachment = await self.pipeline.stage(file)
        except UploadFailed:
            if generation == self._upload_generation:
                self.session.append(build_upload_error_turn(file.name))
            return None

        if generation != self._upload_generation:
            logger.debug("Dropping upload of %s finished after a reset", file.name)
            return None

        self.session.stage_attachment(attachment)
        turn = self.session.append(build_analysis_turn(attachment))
        self.confirmation.observe(turn)
        return attachment

    def remove_attachment(self, attachment_id: str) -> Attachment:
        return self.session.remove_attachment(attachment_id)

    # ── Lifecycle ────────────────────────────────────────────────────

    async def clear_conversation(self) -> Optional[str]:
        """
        Reset the conversation locally and fire off backend cleanup.

        The in-flight dispatch and upload (if any) are orphaned. Deleting the
        stored history runs in the background and its failure is only logged.
        """
        previous = self.session.reset()
        self.dispatcher.invalidate()
        self._upload_generation += 1
        if previous:
            self._spawn(self._delete_remote_history(previous))
        return previous

    async def _delete_remote_history(self, conversation_id: str) -> None:
        try:
            await self._client.delete_conversation(conversation_id)
            logger.info("Deleted stored history for conversation %s", conversation_id)
        except Exception:
            logger.exception("Failed to clear stored history for conversation %s", conversation_id)

    def _spawn(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def aclose(self) -> None:
        """Wait for background cleanup requests to finish."""
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)

    # ── Views ────────────────────────────────────────────────────────

    def available_actions(self) -> list[ActionProposal]:
        return self.confirmation.available_actions()

    def quick_start(self) -> list[QuickStartQuery]:
        """Opening questions, offered only until the first exchange."""
        if len(self.session.turns) > 1:
            return []
        return [QuickStartQuery(**entry) for entry in QUICK_START_QUERIES]

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session.session_id,
            connection_state=self.session.connection_state,
            turns=list(self.session.turns),
            attachments=self.session.attachments,
            pending_confirmation=self.session.pending_confirmation,
            available_actions=self.available_actions(),
            quick_start=self.quick_start(),
        )


# Singleton instance for the HTTP surface
_default_assistant: Optional[StoreAssistant] = None


def get_assistant() -> StoreAssistant:
    """Get or create the default store assistant instance."""
    global _default_assistant
    if _default_assistant is None:
        _default_assistant = StoreAssistant()
    return _default_assistant
