"""Attachment validation and document analysis upload."""

import logging
from typing import Iterable, Optional

from ..core.api_client import AssistantAPIClient, get_api_client
from ..core.config import get_settings
from ..core.errors import TooLarge, UnsupportedType, UploadFailed
from ..schemas.attachments import Attachment, AttachmentState, LocalFile

logger = logging.getLogger(__name__)


def _normalize_mime_type(mime_type: str) -> str:
    return mime_type.lower().split(";", 1)[0].strip()


class AttachmentPipeline:
    """Validate a single file locally, then upload it for analysis.

    The pipeline never touches the conversation: it returns the analysed
    ``Attachment`` (or raises) and leaves staging and turn creation to the
    caller.
    """

    def __init__(
        self,
        client: Optional[AssistantAPIClient] = None,
        allowed_types: Optional[Iterable[str]] = None,
        max_bytes: Optional[int] = None,
    ):
        settings = get_settings()
        self._client = client or get_api_client()
        self.allowed_types = [
            _normalize_mime_type(t) for t in (allowed_types or settings.allowed_attachment_types)
        ]
        self.max_bytes = max_bytes if max_bytes is not None else settings.max_attachment_bytes

    def validate(self, file: LocalFile) -> str:
        """Check type and size without any I/O; return the normalized MIME type."""
        mime_type = _normalize_mime_type(file.mime_type)
        if mime_type not in self.allowed_types:
            raise UnsupportedType(file.mime_type, self.allowed_types)
        if file.size_bytes > self.max_bytes:
            raise TooLarge(file.size_bytes, self.max_bytes)
        return mime_type

    async def stage(self, file: LocalFile) -> Attachment:
        """
        Validate and upload one file for analysis.

        Raises ``UnsupportedType`` or ``TooLarge`` before any network call.
        On transport or backend failure the attachment ends up ``rejected``
        and is carried on the raised ``UploadFailed``.
        """
        mime_type = self.validate(file)
        attachment = Attachment(name=file.name, mime_type=mime_type, size_bytes=file.size_bytes)

        attachment.state = AttachmentState.UPLOADING
        try:
            result = await self._client.upload_document(file.name, mime_type, file.content)
        except UploadFailed as exc:
            attachment.state = AttachmentState.REJECTED
            logger.warning("Upload of %s (%d bytes) failed: %s", file.name, file.size_bytes, exc)
            raise UploadFailed(str(exc), attachment=attachment) from exc

        attachment.remote_url = result.url
        attachment.analysis_summary = result.analysis.summary
        attachment.analysis_suggestions = list(result.analysis.suggestions)
        attachment.state = AttachmentState.ANALYZED
        logger.info("Analyzed document %s as attachment %s", file.name, attachment.id)
        return attachment
