"""
Store-manager AI assistant HTTP client.

This module provides the async client used to talk to the backend reasoning
service: document upload/analysis, chat turns, and conversation cleanup.
"""

from typing import Dict, Optional, Type
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .config import get_settings
from .errors import AssistantError, DispatchFailed, UploadFailed
from ..schemas.backend import ApiEnvelope, ChatRequest, ChatResponseData, UploadResponseData


class AssistantAPIClient:
    """
    Async client for the ``/ai-assistant`` endpoints.

    Every call opens a short-lived ``httpx.AsyncClient`` bounded by the
    configured timeout. Transport errors, non-2xx responses and
    ``{"success": false}`` envelopes are all raised as the caller-facing
    error type of the operation.

    Usage:
        client = AssistantAPIClient()
        data = await client.chat(ChatRequest(message="Show me today's sales"))
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the assistant client.

        All parameters are optional and fall back to settings from config.
        ``transport`` lets tests plug in an ``httpx.MockTransport``.
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.api_token = api_token or settings.api_token
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._transport = transport

    def _get_headers(self) -> Dict[str, str]:
        """Build request headers with optional bearer token."""
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=self.timeout,
            transport=self._transport,
        )

    @staticmethod
    def _unwrap(response: httpx.Response, error_cls: Type[AssistantError]) -> dict:
        """Return the ``data`` object of a successful envelope or raise ``error_cls``."""
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error or not isinstance(payload, dict):
            message = payload.get("message") if isinstance(payload, dict) else None
            raise error_cls(message or f"Backend returned HTTP {response.status_code}")

        envelope = ApiEnvelope.model_validate(payload)
        if not envelope.success or envelope.data is None:
            raise error_cls(envelope.message or "Backend reported failure")
        return envelope.data

    async def upload_document(self, name: str, mime_type: str, content: bytes) -> UploadResponseData:
        """
        Upload one document for analysis.

        Args:
            name: Original file name
            mime_type: Validated MIME type
            content: Raw file bytes

        Returns:
            The remote URL and the backend's analysis of the document
        """
        try:
            async with self._client() as client:
                response = await client.post(
                    "/ai-assistant/upload-document",
                    files={"document": (name, content, mime_type)},
                )
            data = self._unwrap(response, UploadFailed)
            return UploadResponseData.model_validate(data)
        except httpx.HTTPError as exc:
            raise UploadFailed(f"Upload failed: {exc}") from exc
        except ValidationError as exc:
            raise UploadFailed(f"Malformed upload response: {exc}") from exc

    async def chat(self, request: ChatRequest) -> ChatResponseData:
        """
        Send one chat turn to the reasoning service.

        Returns:
            The parsed ``data`` payload of the chat response
        """
        try:
            async with self._client() as client:
                response = await client.post(
                    "/ai-assistant/chat",
                    json=request.model_dump(by_alias=True, mode="json"),
                )
            data = self._unwrap(response, DispatchFailed)
            return ChatResponseData.model_validate(data)
        except httpx.HTTPError as exc:
            raise DispatchFailed(f"Chat request failed: {exc!r}") from exc
        except ValidationError as exc:
            raise DispatchFailed(f"Malformed chat response: {exc}") from exc

    async def delete_conversation(self, conversation_id: str) -> None:
        """Ask the backend to drop the stored history of a conversation."""
        async with self._client() as client:
            response = await client.delete(f"/ai-assistant/conversations/{quote(conversation_id, safe='')}")
            response.raise_for_status()


# Singleton instance for convenience
_default_client: Optional[AssistantAPIClient] = None


def get_api_client() -> AssistantAPIClient:
    """Get or create the default assistant API client instance."""
    global _default_client
    if _default_client is None:
        _default_client = AssistantAPIClient()
    return _default_client
