"""Pydantic models for the conversation session and its HTTP surface.

Defines the connection status enum, the outstanding confirmation request,
the session snapshot served to the UI, and the request bodies accepted by
the assistant routes.
"""

from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .actions import ActionProposal
from .attachments import Attachment
from .turns import Turn


class ConnectionState(StrEnum):
    """Health of the link to the reasoning backend, shown as a status label."""

    CONNECTED = "connected"
    CONNECTING = "connecting"
    DEGRADED = "degraded"


class ConfirmationRequest(BaseModel):
    """A destructive action awaiting an explicit confirm or cancel."""

    model_config = ConfigDict(frozen=True)

    turn_id: str
    action_kind: str
    target_description: str
    confirmation_data: Optional[dict[str, Any]] = None
    proposals: tuple[ActionProposal, ...] = ()
    warning: Optional[str] = None


class QuickStartQuery(BaseModel):
    """A canned opening question offered before the first exchange."""

    title: str
    description: str
    query: str


class SessionSnapshot(BaseModel):
    """Read-only view of a conversation session for the UI."""

    session_id: Optional[str] = None
    connection_state: ConnectionState
    turns: list[Turn]
    attachments: list[Attachment]
    pending_confirmation: Optional[ConfirmationRequest] = None
    available_actions: list[ActionProposal] = []
    quick_start: list[QuickStartQuery] = []


class SendMessageRequest(BaseModel):
    """Body of POST /assistant/messages."""

    text: str = Field(default="", max_length=5000)


class ChooseActionRequest(BaseModel):
    """Body of POST /assistant/actions."""

    label: str = ""
    action: str = Field(min_length=1, max_length=100)
    params: dict[str, Any] = {}

    def to_proposal(self) -> ActionProposal:
        return ActionProposal(label=self.label, action=self.action, params=self.params)
