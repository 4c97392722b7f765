"""Shared fixtures for assistant service tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from store_assistant.core.api_client import AssistantAPIClient
from store_assistant.core.config import Settings
from store_assistant.schemas.actions import ActionProposal
from store_assistant.schemas.attachments import Attachment, AttachmentState, LocalFile
from store_assistant.schemas.backend import (
    ChatResponseData,
    DocumentAnalysis,
    UploadResponseData,
)


MIB = 1024 * 1024


# ── Backend client mock ─────────────────────────────────────────────


@pytest.fixture
def mock_client():
    """AssistantAPIClient mock with async endpoint methods.

    Usage in tests:
        mock_client.chat.return_value = make_chat_response(response="Hi")
        mock_client.chat.side_effect = DispatchFailed("boom")
    """
    client = MagicMock(spec=AssistantAPIClient)
    client.chat = AsyncMock(return_value=make_chat_response())
    client.upload_document = AsyncMock(return_value=make_upload_response())
    client.delete_conversation = AsyncMock(return_value=None)
    return client


@pytest.fixture
def settings():
    return Settings(
        api_base_url="http://backend.test/api/store-manager",
        request_timeout_seconds=5.0,
        retry_warning_threshold=2,
    )


# ── Sample data factories ───────────────────────────────────────────


def make_chat_response(**overrides) -> ChatResponseData:
    defaults = dict(
        response="Here is today's sales summary.",
        suggestions=["Show top medicines", "Compare with yesterday"],
        intent="sales",
        confidence=0.92,
        processing_time=840,
        conversation_id="conv-1",
    )
    defaults.update(overrides)
    return ChatResponseData(**defaults)


def make_upload_response(**overrides) -> UploadResponseData:
    defaults = dict(
        url="https://files.test/uploads/invoice.pdf",
        analysis=DocumentAnalysis(
            summary="This is a supplier bill with 12 line items.",
            suggestions=["Create purchase order", "Extract all medicine names"],
        ),
    )
    defaults.update(overrides)
    return UploadResponseData(**defaults)


def make_delete_response(customer_id: str = "42") -> ChatResponseData:
    """Agent reply asking the user to confirm deleting one customer."""
    return make_chat_response(
        response="Customer 'Ravi Kumar' will be permanently deleted. Confirm?",
        intent="customers",
        requires_confirmation=True,
        confirmation_data={"customerId": customer_id},
        follow_up_actions=[
            ActionProposal(
                label="Confirm Delete Ravi Kumar",
                action="confirm_delete",
                params={"customerId": customer_id},
            ),
            ActionProposal(label="Cancel Deletion", action="cancel_delete", params={}),
        ],
    )


def make_attachment(**overrides) -> Attachment:
    defaults = dict(
        name="invoice.pdf",
        mime_type="application/pdf",
        size_bytes=2 * MIB,
        state=AttachmentState.ANALYZED,
        remote_url="https://files.test/uploads/invoice.pdf",
        analysis_summary="Supplier bill.",
        analysis_suggestions=["Create purchase order"],
    )
    defaults.update(overrides)
    return Attachment(**defaults)


@pytest.fixture
def pdf_file():
    return LocalFile(name="invoice.pdf", mime_type="application/pdf", content=b"%PDF" + b"0" * (2 * MIB - 4))


@pytest.fixture
def bmp_file():
    return LocalFile(name="photo.bmp", mime_type="image/bmp", content=b"B" * MIB)


# ── Factory fixtures ────────────────────────────────────────────────


@pytest.fixture
def chat_response():
    return make_chat_response


@pytest.fixture
def delete_response():
    return make_delete_response


@pytest.fixture
def upload_response():
    return make_upload_response


@pytest.fixture
def analyzed_attachment():
    return make_attachment
