"""Pydantic models for documents attached to the conversation."""

import uuid
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from .backend import DocumentAnalysis, DocumentContext


class AttachmentState(StrEnum):
    """Lifecycle of an attachment: staged -> uploading -> analyzed | rejected."""

    STAGED = "staged"
    UPLOADING = "uploading"
    ANALYZED = "analyzed"
    REJECTED = "rejected"


class LocalFile(BaseModel):
    """A file picked or dropped by the user, before validation."""

    name: str
    mime_type: str
    content: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class Attachment(BaseModel):
    """A user-supplied image or PDF and the backend's analysis of it."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    name: str
    mime_type: str
    size_bytes: int
    state: AttachmentState = AttachmentState.STAGED
    remote_url: Optional[str] = None
    analysis_summary: str = ""
    analysis_suggestions: list[str] = []

    def to_document_context(self) -> DocumentContext:
        """Describe this attachment the way the chat endpoint expects it."""
        return DocumentContext(
            id=self.id,
            name=self.name,
            type=self.mime_type,
            size=self.size_bytes,
            url=self.remote_url,
            analysis=DocumentAnalysis(
                summary=self.analysis_summary,
                suggestions=list(self.analysis_suggestions),
            ),
        )
