"""Confirmation gate for destructive actions proposed by the assistant.

The machine has two states. ``IDLE`` means no destructive action is waiting;
``AWAITING`` means the latest agent turn asked the user to confirm or cancel
something (today: deleting customers). The state is stored on the session as
``pending_confirmation`` so that appending any turn supersedes it.

Nothing here calls a delete endpoint. Confirming only produces the text of
the follow-up user turn; the backend performs the deletion when it receives
that turn.
"""

import logging
from enum import StrEnum
from typing import Any, Optional

from ..data.prompts import DELETION_WARNING
from ..schemas.actions import ActionKind, ActionProposal
from ..schemas.conversations import ConfirmationRequest
from ..schemas.turns import Turn
from .action_router import follow_up_message
from .session import ConversationSession

logger = logging.getLogger(__name__)

_DEFAULT_CANCEL = ActionProposal(label="Cancel Deletion", action=ActionKind.CANCEL_DELETE.value)


class ConfirmationState(StrEnum):
    IDLE = "idle"
    AWAITING = "awaiting_confirmation"


def describe_target(confirmation_data: Optional[dict[str, Any]]) -> str:
    """Human-readable description of what a confirmation would affect."""
    if not confirmation_data:
        return "the selected record"

    customers = confirmation_data.get("customers")
    if isinstance(customers, list) and customers:
        names = []
        for customer in customers:
            if isinstance(customer, dict):
                label = customer.get("name") or customer.get("_id") or "unnamed customer"
                phone = customer.get("phone")
                names.append(f"{label} ({phone})" if phone else str(label))
            else:
                names.append(str(customer))
        noun = "customer" if len(names) == 1 else "customers"
        return f"{noun} {', '.join(names)}"

    return ", ".join(f"{key}: {value}" for key, value in confirmation_data.items())


def build_confirmation_request(turn: Turn) -> ConfirmationRequest:
    """Collect the confirm/cancel affordances of an agent turn into a request."""
    proposals = [p for p in turn.follow_up_actions if p.is_confirmation]
    if not any(p.kind == ActionKind.CANCEL_DELETE for p in proposals):
        proposals.append(_DEFAULT_CANCEL)

    return ConfirmationRequest(
        turn_id=turn.id,
        action_kind=ActionKind.CONFIRM_DELETE.value,
        target_description=describe_target(turn.confirmation_data),
        confirmation_data=turn.confirmation_data,
        proposals=tuple(proposals),
        warning=DELETION_WARNING,
    )


class ConfirmationStateMachine:
    """Track whether the user must confirm before a mutating action proceeds."""

    def __init__(self, session: ConversationSession):
        self._session = session

    @property
    def request(self) -> Optional[ConfirmationRequest]:
        return self._session.pending_confirmation

    @property
    def state(self) -> ConfirmationState:
        return ConfirmationState.IDLE if self.request is None else ConfirmationState.AWAITING

    def observe(self, turn: Turn) -> ConfirmationState:
        """React to a newly appended agent turn."""
        if turn.author == "agent" and turn.requires_confirmation:
            request = build_confirmation_request(turn)
            self._session.set_pending_confirmation(request)
            logger.info("Awaiting confirmation for %s", request.target_description)
        else:
            self._session.set_pending_confirmation(None)
        return self.state

    def resolve(self, proposal: ActionProposal) -> Optional[str]:
        """Apply a confirm/cancel choice and return the user message to send.

        Returns None (and stays put) when nothing is pending or the proposal
        does not belong to the pending request, so a stale confirm button can
        never trigger a deletion.
        """
        request = self.request
        if request is None:
            logger.warning("Ignoring %s: no confirmation is pending", proposal.action_kind)
            return None

        matches = any(
            p.action_kind == proposal.action_kind and p.params == proposal.params
            for p in request.proposals
        )
        if not matches:
            logger.warning(
                "Ignoring %s %s: not offered by the pending confirmation",
                proposal.action_kind,
                proposal.params,
            )
            return None

        message = follow_up_message(proposal)
        if message is None:
            return None
        self._session.set_pending_confirmation(None)
        logger.info("Confirmation resolved with %s", proposal.action_kind)
        return message

    def available_actions(self) -> list[ActionProposal]:
        """Follow-up actions the UI may offer right now."""
        if self.request is not None:
            return list(self.request.proposals)
        last = self._session.last_turn
        if last is None or last.author != "agent":
            return []
        return [p for p in last.follow_up_actions if not p.is_confirmation]
