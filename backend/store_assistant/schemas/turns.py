"""Pydantic model for conversation turns."""

from datetime import UTC, datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .actions import ActionProposal
from .attachments import Attachment

Author = Literal["user", "agent"]


class Turn(BaseModel):
    """A single message in the assistant conversation (user or agent).

    Turns are frozen: once appended to a session they never change, and a
    correction is always a new turn. Agent-only fields stay at their empty
    defaults on user turns.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    author: Author
    content: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    attachments: tuple[Attachment, ...] = ()

    suggestions: tuple[str, ...] = ()
    quick_actions: tuple[ActionProposal, ...] = ()
    follow_up_actions: tuple[ActionProposal, ...] = ()
    requires_confirmation: bool = False
    confirmation_data: Optional[dict[str, Any]] = None
    is_error: bool = False

    intent: Optional[str] = None
    confidence: Optional[float] = None
    processing_time_ms: Optional[float] = None
    action_executed: bool = False
    action_result: Any = None

    @property
    def attachment(self) -> Optional[Attachment]:
        """The first document carried by this turn, if any."""
        return self.attachments[0] if self.attachments else None
