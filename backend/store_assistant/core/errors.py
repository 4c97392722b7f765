"""Exception hierarchy for the store assistant.

Validation errors (``UnsupportedType``, ``TooLarge``) are raised before any
network call. ``UploadFailed`` and ``DispatchFailed`` wrap transport or
backend failures. ``StaleResponse`` marks a response that arrived after a
newer dispatch (or a reset) and must be dropped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..schemas.attachments import Attachment


class AssistantError(Exception):
    """Base class for store assistant errors."""


class AttachmentError(AssistantError):
    """A file could not be staged for the conversation."""


class UnsupportedType(AttachmentError):
    """The file's MIME type is not on the allow-list."""

    def __init__(self, mime_type: str, allowed: list[str]):
        self.mime_type = mime_type
        self.allowed = allowed
        super().__init__(
            f"Unsupported file type '{mime_type}'. "
            "Please upload a valid image (JPG, PNG) or PDF file"
        )


class TooLarge(AttachmentError):
    """The file exceeds the maximum upload size."""

    def __init__(self, size_bytes: int, limit_bytes: int):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"File size {size_bytes} bytes exceeds the limit of "
            f"{limit_bytes // (1024 * 1024)}MB"
        )


class UploadFailed(AttachmentError):
    """The document analysis upload failed; ``attachment`` is left rejected."""

    def __init__(self, message: str, attachment: Attachment | None = None):
        self.attachment = attachment
        super().__init__(message)


class DispatchFailed(AssistantError):
    """The chat request failed in transport or was refused by the backend."""


class StaleResponse(AssistantError):
    """A response arrived for a dispatch that is no longer current."""

    def __init__(self, sequence: int, current: int):
        self.sequence = sequence
        self.current = current
        super().__init__(f"Dropping response for dispatch {sequence}; current is {current}")
