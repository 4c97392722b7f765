"""Wire models for the store-manager AI assistant endpoints.

The backend speaks camelCase JSON wrapped in a ``{success, data, message}``
envelope. Fields the backend may send as ``null`` are coerced to their empty
defaults.
"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .actions import ActionProposal

logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ApiEnvelope(BaseModel):
    """Top-level response shape shared by all assistant endpoints."""

    success: bool = False
    data: Optional[dict[str, Any]] = None
    message: Optional[str] = None
    error: Optional[str] = None


class DocumentAnalysis(CamelModel):
    """Backend analysis of an uploaded document."""

    summary: str = ""
    suggestions: list[str] = []

    @field_validator("summary", mode="before")
    @classmethod
    def _none_as_blank(cls, value: Any) -> Any:
        return value or ""

    @field_validator("suggestions", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return value or []


class UploadResponseData(CamelModel):
    """``data`` of POST /ai-assistant/upload-document."""

    url: str
    analysis: DocumentAnalysis = Field(default_factory=DocumentAnalysis)

    @field_validator("analysis", mode="before")
    @classmethod
    def _default_analysis(cls, value: Any) -> Any:
        return value if value is not None else {}


class DocumentContext(CamelModel):
    """An analysed document sent along with a chat message."""

    id: str
    name: str
    type: str
    size: int
    url: Optional[str] = None
    analysis: Optional[DocumentAnalysis] = None


class ChatRequest(CamelModel):
    """Body of POST /ai-assistant/chat."""

    message: str
    conversation_id: Optional[str] = None
    documents: list[DocumentContext] = []


class ChatResponseData(CamelModel):
    """``data`` of POST /ai-assistant/chat."""

    response: str = ""
    suggestions: list[str] = []
    quick_actions: list[ActionProposal] = []
    follow_up_actions: list[ActionProposal] = []
    intent: Optional[str] = None
    confidence: Optional[float] = None
    processing_time: Optional[float] = None
    action_executed: bool = False
    action_result: Any = None
    requires_confirmation: bool = False
    confirmation_data: Optional[dict[str, Any]] = None
    conversation_id: Optional[str] = None

    @field_validator("suggestions", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return value or []

    @field_validator("quick_actions", "follow_up_actions", mode="before")
    @classmethod
    def _lenient_proposals(cls, value: Any) -> Any:
        """Repair or drop model-generated proposals instead of failing the reply.

        A null ``params`` becomes ``{}`` and a missing label falls back to the
        action kind. Entries without an action kind are dropped.
        """
        proposals = []
        for entry in value if isinstance(value, list) else []:
            if isinstance(entry, ActionProposal):
                proposals.append(entry)
                continue
            action = (entry.get("action") or entry.get("action_kind")) if isinstance(entry, dict) else None
            if not isinstance(action, str) or not action:
                logger.warning("Dropping malformed action proposal: %r", entry)
                continue
            params = entry.get("params")
            proposals.append({
                "label": str(entry.get("label") or action),
                "action": action,
                "params": params if isinstance(params, dict) else {},
            })
        return proposals

    @field_validator("action_executed", "requires_confirmation", mode="before")
    @classmethod
    def _none_as_false(cls, value: Any) -> Any:
        return bool(value)

    @field_validator("response", mode="before")
    @classmethod
    def _none_as_blank(cls, value: Any) -> Any:
        return value or ""
