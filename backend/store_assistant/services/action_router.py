"""Translate follow-up action buttons into the user message they send."""

import logging
from typing import Optional

from ..data.prompts import ACTION_MESSAGES
from ..schemas.actions import ActionProposal

logger = logging.getLogger(__name__)


def follow_up_message(proposal: ActionProposal) -> Optional[str]:
    """Return the message a proposal sends, or None when it is a no-op.

    Unknown kinds (introduced by the backend after this client shipped) and
    proposals missing a parameter their template needs are logged and
    ignored rather than sent half-filled.
    """
    kind = proposal.kind
    if kind is None:
        logger.warning("Ignoring unknown action kind %r (%s)", proposal.action_kind, proposal.label)
        return None

    template = ACTION_MESSAGES[kind.value]
    try:
        return template.format(**proposal.params)
    except KeyError as exc:
        logger.warning("Action %s is missing parameter %s; ignoring", kind.value, exc)
        return None
