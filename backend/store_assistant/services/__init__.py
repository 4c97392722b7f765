"""Services module - conversation orchestration for the store assistant."""

from .assistant import StoreAssistant, get_assistant
from .attachment_pipeline import AttachmentPipeline
from .confirmation import ConfirmationState, ConfirmationStateMachine
from .dispatch import DispatchController
from .session import ConversationSession

__all__ = [
    "StoreAssistant",
    "get_assistant",
    "AttachmentPipeline",
    "ConfirmationState",
    "ConfirmationStateMachine",
    "DispatchController",
    "ConversationSession",
]
