"""Tests for per-tier content rewriting."""

from occ.compaction.classifier import classify_turns
from occ.compaction.reducer import (
    has_content,
    reduce_content,
    remove_tool_calls_from_message,
    strip_thinking_blocks,
    truncate_tool_calls_in_message,
    truncate_tool_result_message,
)
from occ.compaction.turns import identify_turn_boundaries
from occ.compaction.types import ToolRemovalPolicy
from occ.session.models import TextBlock, ThinkingBlock, ToolCallBlock, UnknownBlock

from fixtures import assistant, plain_turn, text, thinking, tool_call, tool_result, tool_turn, user


def _reduce(messages, policy):
    turns = identify_turn_boundaries(messages)
    classification = classify_turns([t for t in turns if t.has_tool_calls], policy)
    return reduce_content(messages, turns, classification)


# ── Message helpers ─────────────────────────────────────────────────


class TestHasContent:
    def test_empty_string(self):
        assert not has_content(assistant(text=""))

    def test_only_empty_text_blocks(self):
        assert not has_content(assistant(text("")))

    def test_non_text_block_counts(self):
        assert has_content(assistant(UnknownBlock({"type": "image"})))


class TestRemoveToolCallsFromMessage:
    def test_keeps_text(self):
        msg = remove_tool_calls_from_message(assistant(text("hi"), tool_call("a")))
        assert msg.content == (TextBlock("hi"),)

    def test_emptied_becomes_empty_text(self):
        msg = remove_tool_calls_from_message(assistant(tool_call("a")))
        assert msg.content == (TextBlock(""),)

    def test_unchanged_returns_same_object(self):
        original = assistant(text("hi"))
        assert remove_tool_calls_from_message(original) is original


class TestTruncateToolCallsInMessage:
    def test_large_arguments_truncated(self):
        msg, count = truncate_tool_calls_in_message(assistant(tool_call("a", arguments={"c": "x" * 400})))
        assert count == 1
        block = msg.content[0]
        assert isinstance(block, ToolCallBlock)
        assert isinstance(block.arguments, str)
        assert block.arguments.endswith("...")
        assert block.id == "a"

    def test_small_arguments_untouched(self):
        original = assistant(tool_call("a"))
        msg, count = truncate_tool_calls_in_message(original)
        assert count == 0
        assert msg is original


class TestTruncateToolResultMessage:
    def test_long_result(self):
        msg = truncate_tool_result_message(tool_result("a", "z" * 500))
        assert msg.content == "z" * 120 + "[truncated]"
        assert msg.tool_call_id == "a"

    def test_short_string_same_object(self):
        original = tool_result("a", "ok")
        assert truncate_tool_result_message(original) is original

    def test_short_blocks_become_string(self):
        msg = truncate_tool_result_message(tool_result("a", [TextBlock("ok")]))
        assert msg.content == "ok"


class TestStripThinkingBlocks:
    def test_removes_and_counts(self):
        msg, removed = strip_thinking_blocks(assistant(thinking(), text("a"), thinking()))
        assert removed == 2
        assert msg.content == (TextBlock("a"),)

    def test_string_content(self):
        original = assistant(text="hi")
        assert strip_thinking_blocks(original) == (original, 0)


# ── reduce_content ──────────────────────────────────────────────────


class TestReduceContent:
    def test_remove_tier_drops_results_and_empty_messages(self):
        messages = [user(), assistant(tool_call("a")), tool_result("a"), assistant(text="done")]
        result = _reduce(messages, ToolRemovalPolicy(0, 0))

        roles = [m.role for m in result.messages]
        assert roles == ["user", "assistant"]
        assert result.messages[1].content == "done"
        assert result.source_indices == [0, 3]

    def test_remove_tier_keeps_text_beside_calls(self):
        messages = tool_turn(0)
        result = _reduce(messages, ToolRemovalPolicy(0, 0))
        assert result.messages[1].content == (TextBlock("checking 0"),)

    def test_truncate_tier(self):
        messages = tool_turn(0, arguments={"blob": "b" * 300}, result="r" * 300)
        result = _reduce(messages, ToolRemovalPolicy(1, 100))

        assert result.tool_calls_truncated == 1
        call = result.messages[1].content[1]
        assert call.arguments.endswith("...")
        assert result.messages[2].content.endswith("[truncated]")

    def test_preserve_tier_untouched(self):
        messages = tool_turn(0, arguments={"blob": "b" * 300}, result="r" * 300)
        result = _reduce(messages, ToolRemovalPolicy(1, 0))
        assert result.messages == messages

    def test_tool_free_turns_pass_through(self):
        messages = plain_turn(0) + tool_turn(1)
        result = _reduce(messages, ToolRemovalPolicy(0, 0))
        assert result.messages[:2] == messages[:2]

    def test_thinking_stripped_in_every_turn(self):
        messages = [
            user("a"),
            assistant(thinking(), text("plain")),
            *tool_turn(1),
            user("b"),
            assistant(thinking("only thinking")),
        ]
        result = _reduce(messages, ToolRemovalPolicy(5, 0))

        assert result.thinking_blocks_removed == 2
        assert not any(
            isinstance(block, ThinkingBlock)
            for m in result.messages
            if isinstance(m.content, tuple)
            for block in m.content
        )
        # The all-thinking message stays with an empty block list
        assert len(result.messages) == len(messages)
        assert result.messages[-1].role == "assistant"
        assert result.messages[-1].content == ()

    def test_thinking_only_message_kept_in_preserve_turn(self):
        messages = [user(), assistant(thinking("plan")), assistant(tool_call("c1")), tool_result("c1")]
        result = _reduce(messages, ToolRemovalPolicy(1, 0))

        assert result.source_indices == [0, 1, 2, 3]
        assert result.messages[1].content == ()
        assert result.thinking_blocks_removed == 1

    def test_thinking_keeps_remove_turn_message(self):
        messages = [user(), assistant(thinking(), tool_call("c1")), tool_result("c1")]
        result = _reduce(messages, ToolRemovalPolicy(0, 0))

        assert result.source_indices == [0, 1]
        assert result.messages[1].content == ()
