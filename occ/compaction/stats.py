"""Before/after statistics for a reduction run."""

from typing import Sequence

from occ.compaction.turns import get_tool_call_ids
from occ.compaction.types import ReductionStatistics, TurnBoundary, TurnClassification
from occ.session.models import MessageEntry
from occ.session.parser import serialize_jsonl


def count_message_tool_calls(messages: Sequence[MessageEntry]) -> int:
    return sum(len(get_tool_call_ids(m)) for m in messages)


def serialized_size(messages: Sequence[MessageEntry]) -> int:
    """Size in bytes of the messages written as JSONL."""
    if not messages:
        return 0
    return len(serialize_jsonl(messages).encode("utf-8"))


def reduction_percent(original_size: int, new_size: int) -> float:
    """Percentage saved, floored at 0 so a grown transcript reports 0."""
    if original_size <= 0:
        return 0.0
    return max(0.0, (original_size - new_size) / original_size * 100)


def calculate_statistics(
    turns_with_tools: Sequence[TurnBoundary],
    classification: TurnClassification,
    original_messages: Sequence[MessageEntry],
    final_messages: Sequence[MessageEntry],
    tool_calls_truncated: int = 0,
    thinking_blocks_removed: int = 0,
) -> ReductionStatistics:
    """
    Compare original and final messages.

    tool_calls_removed is the difference in tool-call counts, so it includes
    calls dropped by orphan repair as well as those in removed turns.
    """
    original_tool_calls = count_message_tool_calls(original_messages)
    final_tool_calls = count_message_tool_calls(final_messages)
    size_original = serialized_size(original_messages)
    size_after = serialized_size(final_messages)

    return ReductionStatistics(
        turns_with_tools_total=len(turns_with_tools),
        turns_with_tools_removed=len(classification.remove),
        turns_with_tools_truncated=len(classification.truncate),
        turns_with_tools_preserved=len(classification.preserve),
        tool_calls_original=original_tool_calls,
        tool_calls_removed=original_tool_calls - final_tool_calls,
        tool_calls_truncated=tool_calls_truncated,
        thinking_blocks_removed=thinking_blocks_removed,
        messages_original=len(original_messages),
        messages_after=len(final_messages),
        size_original=size_original,
        size_after=size_after,
        reduction_percent=reduction_percent(size_original, size_after),
    )
