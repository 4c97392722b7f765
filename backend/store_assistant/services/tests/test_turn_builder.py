"""Tests for turn_builder: user, agent, error, welcome and analysis turns."""

import pytest
from pydantic import ValidationError

from store_assistant.data.prompts import (
    ANALYSIS_FALLBACK_SUGGESTIONS,
    CLEARED_MESSAGE,
    ESCALATED_ERROR_MESSAGE,
    RETRY_MESSAGE,
)
from store_assistant.services.turn_builder import (
    CLEARED_TURN_ID,
    WELCOME_TURN_ID,
    build_agent_turn,
    build_analysis_turn,
    build_error_turn,
    build_upload_error_turn,
    build_user_turn,
    build_welcome_turn,
)


class TestBuildUserTurn:
    def test_text_only(self):
        turn = build_user_turn("Show me today's sales")
        assert turn.author == "user"
        assert turn.content == "Show me today's sales"
        assert turn.attachments == ()
        assert turn.attachment is None

    def test_text_and_attachment_coexist(self, analyzed_attachment):
        attachment = analyzed_attachment()
        turn = build_user_turn("Create a purchase order", [attachment])
        assert turn.content == "Create a purchase order\n📄 Uploaded document: invoice.pdf"
        assert turn.attachment is attachment

    def test_attachment_only(self, analyzed_attachment):
        turn = build_user_turn("", [analyzed_attachment(name="rx.png", mime_type="image/png")])
        assert turn.content == "📄 Uploaded document: rx.png"

    def test_one_marker_per_attachment(self, analyzed_attachment):
        turn = build_user_turn("Compare", [analyzed_attachment(name="a.pdf"), analyzed_attachment(name="b.pdf")])
        assert turn.content.splitlines() == [
            "Compare",
            "📄 Uploaded document: a.pdf",
            "📄 Uploaded document: b.pdf",
        ]
        assert len(turn.attachments) == 2

    def test_text_is_kept_verbatim(self, analyzed_attachment):
        text = "  Stock of Dolo 650?\n  and Crocin  "
        assert build_user_turn(text).content == text
        turn = build_user_turn(text, [analyzed_attachment()])
        assert turn.content == text + "\n📄 Uploaded document: invoice.pdf"

    def test_empty_input_is_rejected(self):
        with pytest.raises(ValueError):
            build_user_turn("   ", [])

    def test_ids_are_unique(self):
        ids = {build_user_turn("hi").id for _ in range(100)}
        assert len(ids) == 100

    def test_turn_is_frozen(self):
        turn = build_user_turn("hi")
        with pytest.raises(ValidationError):
            turn.content = "changed"


class TestBuildAgentTurn:
    def test_maps_response_fields(self, delete_response):
        turn = build_agent_turn(delete_response("42"))
        assert turn.author == "agent"
        assert turn.requires_confirmation is True
        assert turn.confirmation_data == {"customerId": "42"}
        assert [p.action_kind for p in turn.follow_up_actions] == ["confirm_delete", "cancel_delete"]
        assert turn.intent == "customers"
        assert turn.processing_time_ms == 840
        assert turn.is_error is False

    def test_action_result(self, chat_response):
        turn = build_agent_turn(chat_response(action_executed=True, action_result={"id": "c9"}))
        assert turn.action_executed is True
        assert turn.action_result == {"id": "c9"}


class TestBuildErrorTurn:
    def test_below_threshold_offers_retry(self):
        turn = build_error_turn(failure_count=1, threshold=2)
        assert turn.is_error is True
        assert turn.content == RETRY_MESSAGE
        assert turn.suggestions == ("Try again", "Show me dashboard", "Help")

    def test_at_threshold_escalates(self):
        turn = build_error_turn(failure_count=2, threshold=2)
        assert turn.content == ESCALATED_ERROR_MESSAGE
        assert turn.suggestions == ()

    def test_threshold_is_configurable(self):
        assert build_error_turn(failure_count=2, threshold=3).suggestions
        assert not build_error_turn(failure_count=1, threshold=1).suggestions


class TestWelcomeAndAnalysisTurns:
    def test_welcome_ids_are_fixed(self):
        assert build_welcome_turn().id == WELCOME_TURN_ID
        assert build_welcome_turn(fresh=True).id == CLEARED_TURN_ID
        assert build_welcome_turn(fresh=True).content == CLEARED_MESSAGE

    def test_analysis_uses_backend_suggestions(self, analyzed_attachment):
        turn = build_analysis_turn(analyzed_attachment())
        assert 'analyzed your document "invoice.pdf"' in turn.content
        assert "Supplier bill." in turn.content
        assert turn.suggestions == ("Create purchase order",)

    def test_analysis_falls_back_to_stock_suggestions(self, analyzed_attachment):
        turn = build_analysis_turn(analyzed_attachment(analysis_suggestions=[]))
        assert list(turn.suggestions) == ANALYSIS_FALLBACK_SUGGESTIONS

    def test_upload_error_turn(self):
        turn = build_upload_error_turn("scan.jpg")
        assert turn.is_error is True
        assert "scan.jpg" in turn.content
