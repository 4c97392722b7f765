"""Pydantic model for follow-up actions proposed by the assistant."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActionKind(StrEnum):
    """Action kinds the assistant knows how to turn into a follow-up message.

    The backend may introduce kinds not listed here; those stay on the
    proposal as a raw string and resolve to ``None`` via ``ActionProposal.kind``.
    """

    ADD_CUSTOMER_DETAILS = "add_customer_details"
    EDIT_CUSTOMER = "edit_customer"
    ADD_CUSTOMER = "add_customer"
    VIEW_CUSTOMERS = "view_customers"
    CONFIRM_DELETE = "confirm_delete"
    CANCEL_DELETE = "cancel_delete"
    SEARCH_CUSTOMERS = "search_customers"
    CUSTOMER_ANALYTICS = "customer_analytics"


CONFIRMATION_KINDS = frozenset({ActionKind.CONFIRM_DELETE, ActionKind.CANCEL_DELETE})


class ActionProposal(BaseModel):
    """A button the UI can offer after an agent turn.

    On the wire the kind is sent as ``action``: ``{"label", "action", "params"}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str
    action_kind: str = Field(alias="action")
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def kind(self) -> ActionKind | None:
        """The known kind of this proposal, or None for an unrecognised one."""
        try:
            return ActionKind(self.action_kind)
        except ValueError:
            return None

    @property
    def is_confirmation(self) -> bool:
        return self.kind in CONFIRMATION_KINDS
