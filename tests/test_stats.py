"""Tests for reduction statistics and token estimation."""

from occ.compaction.estimator import estimate_message_tokens, estimate_messages_tokens, estimate_tokens
from occ.compaction.stats import calculate_statistics, reduction_percent, serialized_size
from occ.compaction.types import TurnClassification

from fixtures import assistant, text, thinking, tool_call, tool_transcript, user


class TestReductionPercent:
    def test_half(self):
        assert reduction_percent(200, 100) == 50.0

    def test_empty_original(self):
        assert reduction_percent(0, 0) == 0.0

    def test_growth_floored_at_zero(self):
        assert reduction_percent(100, 150) == 0.0


class TestSerializedSize:
    def test_empty(self):
        assert serialized_size([]) == 0

    def test_counts_utf8_bytes(self):
        ascii_size = serialized_size([user("aa")])
        assert serialized_size([user("éé")]) == ascii_size + 2


class TestCalculateStatistics:
    def test_counts(self):
        original = tool_transcript(3)
        final = original[4:]
        classification = TurnClassification(remove=[0], preserve=[1, 2])

        stats = calculate_statistics(
            [], classification, original, final,
            tool_calls_truncated=0, thinking_blocks_removed=4,
        )
        assert stats.tool_calls_original == 3
        assert stats.tool_calls_removed == 1
        assert stats.turns_with_tools_removed == 1
        assert stats.turns_with_tools_preserved == 2
        assert stats.messages_original == 12
        assert stats.messages_after == 8
        assert stats.thinking_blocks_removed == 4
        assert stats.size_after < stats.size_original


class TestEstimator:
    def test_empty_text(self):
        assert estimate_tokens("") == 0

    def test_text(self):
        assert estimate_tokens("abcdefgh") == 2

    def test_message_overhead(self):
        assert estimate_message_tokens(user("")) == 4

    def test_blocks(self):
        msg = assistant(text("abcd"), thinking("abcd"), tool_call("c", name="ls", arguments={}))
        # 4 overhead + 1 text + 1 thinking + (1 name + 1 args + 10)
        assert estimate_message_tokens(msg) == 18

    def test_total(self):
        messages = [user("abcd"), user("abcd")]
        assert estimate_messages_tokens(messages) == 10
