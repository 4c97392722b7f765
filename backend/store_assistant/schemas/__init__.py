"""Schemas module - Pydantic models for the assistant session and backend wire format."""

from .actions import ActionKind, ActionProposal
from .attachments import Attachment, AttachmentState, LocalFile
from .backend import (
    ApiEnvelope,
    ChatRequest,
    ChatResponseData,
    DocumentAnalysis,
    DocumentContext,
    UploadResponseData,
)
from .conversations import (
    ChooseActionRequest,
    ConfirmationRequest,
    ConnectionState,
    QuickStartQuery,
    SendMessageRequest,
    SessionSnapshot,
)
from .turns import Author, Turn

__all__ = [
    # Actions
    "ActionKind",
    "ActionProposal",
    # Attachments
    "Attachment",
    "AttachmentState",
    "LocalFile",
    # Backend wire format
    "ApiEnvelope",
    "ChatRequest",
    "ChatResponseData",
    "DocumentAnalysis",
    "DocumentContext",
    "UploadResponseData",
    # Conversations
    "ChooseActionRequest",
    "ConfirmationRequest",
    "ConnectionState",
    "QuickStartQuery",
    "SendMessageRequest",
    "SessionSnapshot",
    # Turns
    "Author",
    "Turn",
]
