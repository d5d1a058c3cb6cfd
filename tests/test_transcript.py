import json

import pytest
from pydantic import ValidationError

from voicechat.models.realtime_messages import (
    AgentResponseMessage,
    TranscriptMessage,
    parse_realtime_message,
)
from voicechat.models.session_schemas import CallSnapshot
from voicechat.models.transcript import TranscriptEntry, split_finalized_transcript


class TestSplitFinalizedTranscript:
    def test_splits_turns_in_order(self):
        transcript = (
            "Agent: Welcome to Sakura, what can I get you?\n"
            "User: What do you recommend tonight?\n"
            "Agent: The omakase, without a doubt.\n"
        )

        entries = split_finalized_transcript(transcript)

        assert entries == [
            TranscriptEntry(role="assistant", text="Welcome to Sakura, what can I get you?"),
            TranscriptEntry(role="user", text="What do you recommend tonight?"),
            TranscriptEntry(role="assistant", text="The omakase, without a doubt."),
        ]

    def test_continuation_lines_join_previous_turn(self):
        transcript = "User: I'd like sushi\nand some miso soup\nAgent: Coming right up"

        entries = split_finalized_transcript(transcript)

        assert len(entries) == 2
        assert entries[0].text == "I'd like sushi\nand some miso soup"
        assert entries[1].role == "assistant"

    def test_text_before_first_speaker_is_dropped(self):
        entries = split_finalized_transcript("call started\nAgent: Hello")

        assert entries == [TranscriptEntry(role="assistant", text="Hello")]

    def test_labels_must_start_the_line(self):
        entries = split_finalized_transcript("Agent: the sign said User: wait here")

        assert len(entries) == 1
        assert entries[0].text == "the sign said User: wait here"

    def test_empty_turn_does_not_swallow_next_label(self):
        entries = split_finalized_transcript("Agent:\nUser: I'd like sushi\nAgent: Sure")

        assert [e.role for e in entries] == ["assistant", "user", "assistant"]
        assert entries[0].text == ""
        assert entries[1].text == "I'd like sushi"

    def test_trailing_spaces_after_label_are_stripped(self):
        entries = split_finalized_transcript("User: \t hello")

        assert entries == [TranscriptEntry(role="user", text="hello")]

    def test_empty_transcript(self):
        assert split_finalized_transcript("") == []
        assert split_finalized_transcript("   \n") == []


class TestParseRealtimeMessage:
    def test_transcript_event(self):
        message = parse_realtime_message(json.dumps({"type": "transcript", "text": "hello"}))

        assert isinstance(message, TranscriptMessage)
        assert message.text == "hello"

    def test_agent_response_event(self):
        message = parse_realtime_message(
            json.dumps({"type": "agent_response", "text": "hi there", "response_id": 3})
        )

        assert isinstance(message, AgentResponseMessage)
        assert message.text == "hi there"

    def test_other_event_types_are_ignored(self):
        assert parse_realtime_message(json.dumps({"type": "update", "turntaking": "agent_turn"})) is None
        assert parse_realtime_message(json.dumps({"text": "no type"})) is None
        assert parse_realtime_message(json.dumps(["not", "an", "object"])) is None

    def test_invalid_json_raises(self):
        with pytest.raises(json.JSONDecodeError):
            parse_realtime_message("not json")

    def test_missing_text_raises(self):
        with pytest.raises(ValidationError):
            parse_realtime_message(json.dumps({"type": "transcript"}))


class TestCallSnapshot:
    def test_extra_vendor_fields_are_kept(self):
        call = CallSnapshot(call_id="call_1", agent_id="agent_1", duration_ms=1200)

        assert call.model_extra["agent_id"] == "agent_1"

    @pytest.mark.parametrize("transcript,expected", [(None, False), ("", False), ("  ", False), ("Agent: Hi", True)])
    def test_has_transcript(self, transcript, expected):
        assert CallSnapshot(transcript=transcript).has_transcript is expected
