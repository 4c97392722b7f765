"""Core module - configuration, errors and the backend HTTP client."""

from .api_client import AssistantAPIClient, get_api_client
from .config import get_settings, Settings
from .errors import (
    AssistantError,
    AttachmentError,
    DispatchFailed,
    StaleResponse,
    TooLarge,
    UnsupportedType,
    UploadFailed,
)

__all__ = [
    "AssistantAPIClient",
    "get_api_client",
    "get_settings",
    "Settings",
    "AssistantError",
    "AttachmentError",
    "DispatchFailed",
    "StaleResponse",
    "TooLarge",
    "UnsupportedType",
    "UploadFailed",
]
