"""Tests for the confirmation state machine and follow-up action routing."""

from store_assistant.data.prompts import DELETION_WARNING
from store_assistant.schemas.actions import ActionKind, ActionProposal
from store_assistant.services.action_router import follow_up_message
from store_assistant.services.confirmation import (
    ConfirmationState,
    ConfirmationStateMachine,
    build_confirmation_request,
    describe_target,
)
from store_assistant.services.session import ConversationSession
from store_assistant.services.turn_builder import build_agent_turn, build_user_turn


def _awaiting(delete_response):
    session = ConversationSession()
    machine = ConfirmationStateMachine(session)
    turn = session.append(build_agent_turn(delete_response("42")))
    machine.observe(turn)
    return session, machine


# ── follow_up_message ────────────────────────────────────────────────


class TestFollowUpMessage:
    def test_known_kinds(self):
        cases = [
            (ActionProposal(label="x", action="add_customer_details", params={"customerName": "Asha"}), "Add more details for customer Asha"),
            (ActionProposal(label="x", action="edit_customer", params={"customerName": "Asha"}), "Edit customer Asha"),
            (ActionProposal(label="x", action="add_customer"), "Add a new customer"),
            (ActionProposal(label="x", action="view_customers"), "Show me all customers"),
            (ActionProposal(label="x", action="confirm_delete", params={"customerId": 42}), "Confirm delete customer ID 42"),
            (ActionProposal(label="x", action="cancel_delete"), "Cancel the deletion request"),
            (ActionProposal(label="x", action="search_customers"), "Search for customers"),
            (ActionProposal(label="x", action="customer_analytics"), "Show customer analytics"),
        ]
        for proposal, expected in cases:
            assert follow_up_message(proposal) == expected

    def test_unknown_kind_is_a_noop(self):
        proposal = ActionProposal(label="Export", action="export_pdf")
        assert proposal.kind is None
        assert follow_up_message(proposal) is None

    def test_missing_parameter_is_a_noop(self):
        assert follow_up_message(ActionProposal(label="Delete", action="confirm_delete")) is None


# ── describe_target / build_confirmation_request ─────────────────────


class TestConfirmationRequest:
    def test_describe_plain_mapping(self):
        assert describe_target({"customerId": 42}) == "customerId: 42"

    def test_describe_customers(self):
        data = {"customers": [{"name": "Ravi", "phone": "98450"}, {"name": "Meena"}]}
        assert describe_target(data) == "customers Ravi (98450), Meena"

    def test_describe_missing(self):
        assert describe_target(None) == "the selected record"

    def test_default_cancel_is_added(self, chat_response):
        turn = build_agent_turn(chat_response(
            requires_confirmation=True,
            follow_up_actions=[ActionProposal(label="Delete", action="confirm_delete", params={"customerId": "1"})],
        ))
        request = build_confirmation_request(turn)
        assert [p.kind for p in request.proposals] == [ActionKind.CONFIRM_DELETE, ActionKind.CANCEL_DELETE]
        assert request.turn_id == turn.id
        assert request.warning == DELETION_WARNING


# ── ConfirmationStateMachine ─────────────────────────────────────────


class TestStateMachine:
    def test_enters_awaiting(self, delete_response):
        session, machine = _awaiting(delete_response)
        assert machine.state == ConfirmationState.AWAITING
        assert session.pending_confirmation.target_description == "customerId: 42"

    def test_non_confirming_agent_turn_returns_to_idle(self, delete_response, chat_response):
        session, machine = _awaiting(delete_response)
        turn = session.append(build_agent_turn(chat_response()))
        machine.observe(turn)
        assert machine.state == ConfirmationState.IDLE
        assert session.pending_confirmation is None

    def test_cancel_resolves_to_idle(self, delete_response):
        session, machine = _awaiting(delete_response)
        message = machine.resolve(ActionProposal(label="Cancel Deletion", action="cancel_delete"))
        assert message == "Cancel the deletion request"
        assert machine.state == ConfirmationState.IDLE

    def test_confirm_resolves_to_idle(self, delete_response):
        _, machine = _awaiting(delete_response)
        message = machine.resolve(
            ActionProposal(label="Confirm", action="confirm_delete", params={"customerId": "42"})
        )
        assert message == "Confirm delete customer ID 42"
        assert machine.state == ConfirmationState.IDLE

    def test_confirm_for_other_target_is_ignored(self, delete_response):
        _, machine = _awaiting(delete_response)
        message = machine.resolve(
            ActionProposal(label="Confirm", action="confirm_delete", params={"customerId": "99"})
        )
        assert message is None
        assert machine.state == ConfirmationState.AWAITING

    def test_confirm_while_idle_is_ignored(self):
        machine = ConfirmationStateMachine(ConversationSession())
        message = machine.resolve(
            ActionProposal(label="Confirm", action="confirm_delete", params={"customerId": "42"})
        )
        assert message is None

    def test_user_turn_supersedes(self, delete_response):
        session, machine = _awaiting(delete_response)
        session.append(build_user_turn("never mind, show low stock"))
        assert machine.state == ConfirmationState.IDLE

    def test_only_confirmation_actions_while_awaiting(self, chat_response):
        session = ConversationSession()
        machine = ConfirmationStateMachine(session)
        turn = session.append(build_agent_turn(chat_response(
            requires_confirmation=True,
            follow_up_actions=[
                ActionProposal(label="View", action="view_customers"),
                ActionProposal(label="Delete", action="confirm_delete", params={"customerId": "1"}),
                ActionProposal(label="Cancel", action="cancel_delete"),
            ],
        )))
        machine.observe(turn)
        assert {p.action_kind for p in machine.available_actions()} == {"confirm_delete", "cancel_delete"}

    def test_idle_actions_hide_confirmation_buttons(self, chat_response):
        session = ConversationSession()
        machine = ConfirmationStateMachine(session)
        turn = session.append(build_agent_turn(chat_response(
            follow_up_actions=[
                ActionProposal(label="Edit", action="edit_customer", params={"customerName": "Asha"}),
                ActionProposal(label="Delete", action="confirm_delete", params={"customerId": "1"}),
            ],
        )))
        machine.observe(turn)
        assert [p.action_kind for p in machine.available_actions()] == ["edit_customer"]
