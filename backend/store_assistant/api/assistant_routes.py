"""Store assistant API endpoints.

Exposes the conversation session to the store-manager UI: read the session,
send a message, stage or unstage a document, pick a follow-up action, and
clear the conversation. All routes operate on the default assistant.
"""

import logging

from fastapi import APIRouter, File, HTTPException, Path, UploadFile

from ..core.errors import TooLarge, UnsupportedType
from ..schemas.attachments import Attachment, LocalFile
from ..schemas.conversations import ChooseActionRequest, SendMessageRequest, SessionSnapshot
from ..services.assistant import get_assistant

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assistant", tags=["assistant"])


@router.get("/session", response_model=SessionSnapshot)
async def get_session():
    """Return the current conversation, staged documents and available actions."""
    return get_assistant().snapshot()


@router.post("/messages", response_model=SessionSnapshot)
async def send_message(body: SendMessageRequest):
    """Send a user turn and return the updated session.

    Dispatch failures do not produce an HTTP error: they show up as an error
    turn in the returned session.
    """
    assistant = get_assistant()
    try:
        await assistant.send_message(body.text)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return assistant.snapshot()


@router.post("/attachments", response_model=Attachment)
async def upload_attachment(document: UploadFile = File(...)):
    """Validate and analyse a document, staging it for the next message."""
    if not document.filename:
        raise HTTPException(status_code=400, detail="Document must have a filename.")

    assistant = get_assistant()
    limit = assistant.pipeline.max_bytes
    if document.size is not None and document.size > limit:
        raise HTTPException(status_code=413, detail=str(TooLarge(document.size, limit)))

    # One byte past the limit is enough for validation to reject the file
    content = await document.read(limit + 1)
    file = LocalFile(
        name=document.filename,
        mime_type=document.content_type or "application/octet-stream",
        content=content,
    )

    try:
        attachment = await assistant.attach(file)
    except UnsupportedType as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except TooLarge as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from exc

    if attachment is None:
        raise HTTPException(status_code=502, detail="Failed to upload document. Please try again.")
    return attachment


@router.delete("/attachments/{attachment_id}", response_model=Attachment)
async def remove_attachment(attachment_id: str = Path(min_length=1, max_length=50)):
    """Unstage a document before it is sent."""
    try:
        return get_assistant().remove_attachment(attachment_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Attachment not found") from exc


@router.post("/actions", response_model=SessionSnapshot)
async def choose_action(body: ChooseActionRequest):
    """Act on a follow-up action button. Unknown or stale actions are no-ops."""
    assistant = get_assistant()
    await assistant.choose_action(body.to_proposal())
    return assistant.snapshot()


@router.delete("/session", response_model=SessionSnapshot)
async def clear_session():
    """Clear the conversation; backend history deletion runs in the background."""
    assistant = get_assistant()
    await assistant.clear_conversation()
    return assistant.snapshot()
