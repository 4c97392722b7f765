"""Pure constructors for conversation turns.

Nothing here performs I/O; every function returns a new frozen ``Turn``.
"""

import itertools
import time
from typing import Sequence

from ..data.prompts import (
    ANALYSIS_FALLBACK_SUGGESTIONS,
    ANALYSIS_MESSAGE,
    ATTACHMENT_MARKER,
    CLEARED_MESSAGE,
    CLEARED_SUGGESTIONS,
    ESCALATED_ERROR_MESSAGE,
    RETRY_MESSAGE,
    RETRY_SUGGESTIONS,
    UPLOAD_FAILED_MESSAGE,
    WELCOME_MESSAGE,
    WELCOME_SUGGESTIONS,
)
from ..schemas.attachments import Attachment
from ..schemas.backend import ChatResponseData
from ..schemas.turns import Author, Turn

WELCOME_TURN_ID = "welcome"
CLEARED_TURN_ID = "welcome-new"

_counter = itertools.count(1)


def _next_turn_id(author: Author) -> str:
    """Generate a turn id in ``{epoch_ms}-{seq}-{author}`` format."""
    return f"{time.time_ns() // 1_000_000}-{next(_counter)}-{author}"


def build_user_turn(text: str, attachments: Sequence[Attachment] = ()) -> Turn:
    """Build the user turn for typed text and any staged documents.

    The text is kept verbatim and one marker line is added per attachment.
    Whitespace-only text counts as empty: either real text or at least one
    attachment is required.
    """
    has_text = bool(text and text.strip())
    if not has_text and not attachments:
        raise ValueError("A user turn needs text or at least one attachment")

    lines = [text] if has_text else []
    lines.extend(ATTACHMENT_MARKER.format(name=a.name) for a in attachments)

    return Turn(
        id=_next_turn_id("user"),
        author="user",
        content="\n".join(lines),
        attachments=tuple(attachments),
    )


def build_agent_turn(data: ChatResponseData) -> Turn:
    """Map a chat response payload onto an agent turn."""
    return Turn(
        id=_next_turn_id("agent"),
        author="agent",
        content=data.response,
        suggestions=tuple(data.suggestions),
        quick_actions=tuple(data.quick_actions),
        follow_up_actions=tuple(data.follow_up_actions),
        requires_confirmation=data.requires_confirmation,
        confirmation_data=data.confirmation_data,
        intent=data.intent,
        confidence=data.confidence,
        processing_time_ms=data.processing_time,
        action_executed=data.action_executed,
        action_result=data.action_result,
    )


def build_error_turn(failure_count: int, threshold: int) -> Turn:
    """Synthetic agent turn for a failed dispatch.

    Quick replies are offered while ``failure_count`` is below ``threshold``;
    from then on the message escalates and suggestions are dropped.
    """
    below = failure_count < threshold
    return Turn(
        id=_next_turn_id("agent"),
        author="agent",
        content=RETRY_MESSAGE if below else ESCALATED_ERROR_MESSAGE,
        suggestions=tuple(RETRY_SUGGESTIONS) if below else (),
        is_error=True,
    )


def build_welcome_turn(fresh: bool = False) -> Turn:
    """Greeting for a new page load, or for a just-cleared conversation."""
    if fresh:
        return Turn(
            id=CLEARED_TURN_ID,
            author="agent",
            content=CLEARED_MESSAGE,
            suggestions=tuple(CLEARED_SUGGESTIONS),
        )
    return Turn(
        id=WELCOME_TURN_ID,
        author="agent",
        content=WELCOME_MESSAGE,
        suggestions=tuple(WELCOME_SUGGESTIONS),
    )


def build_analysis_turn(attachment: Attachment) -> Turn:
    """Agent turn announcing the analysis of a freshly uploaded document."""
    summary = attachment.analysis_summary.strip()
    return Turn(
        id=_next_turn_id("agent"),
        author="agent",
        content=ANALYSIS_MESSAGE.format(name=attachment.name, summary=summary),
        suggestions=tuple(attachment.analysis_suggestions or ANALYSIS_FALLBACK_SUGGESTIONS),
    )


def build_upload_error_turn(name: str) -> Turn:
    return Turn(
        id=_next_turn_id("agent"),
        author="agent",
        content=UPLOAD_FAILED_MESSAGE.format(name=name),
        is_error=True,
    )
