"""Turn segmentation over message entries."""

from typing import Sequence

from occ.compaction.types import TurnBoundary
from occ.session.models import MessageEntry, ToolCallBlock


def message_has_tool_calls(message: MessageEntry) -> bool:
    """True if the message content is a block list with at least one tool call."""
    content = message.content
    if isinstance(content, str):
        return False
    return any(isinstance(block, ToolCallBlock) for block in content)


def get_tool_call_ids(message: MessageEntry) -> list[str]:
    """IDs of every tool-call block in the message, in order."""
    content = message.content
    if isinstance(content, str):
        return []
    return [block.id for block in content if isinstance(block, ToolCallBlock)]


def identify_turn_boundaries(messages: Sequence[MessageEntry]) -> list[TurnBoundary]:
    """
    Group messages into conversational turns.

    A turn starts at every ``user`` message (tool results do not start one)
    and runs up to the next ``user`` message; the last turn runs to the end.
    Messages before the first ``user`` message form a leading turn that is
    always reported as tool-free, so it is never classified or reduced.

    Args:
        messages: Message entries in file order, header excluded.

    Returns:
        Turns in file order with turn_index counting from 0.
    """
    if not messages:
        return []

    starts = [i for i, m in enumerate(messages) if m.role == "user"]
    if not starts or starts[0] != 0:
        starts.insert(0, 0)
    ends = starts[1:] + [len(messages)]

    turns: list[TurnBoundary] = []
    for turn_index, (start, end) in enumerate(zip(starts, ends)):
        leading = messages[start].role != "user"
        has_tool_calls = not leading and any(
            message_has_tool_calls(m) for m in messages[start:end]
        )
        turns.append(TurnBoundary(
            start_index=start,
            end_index=end - 1,
            turn_index=turn_index,
            has_tool_calls=has_tool_calls,
        ))

    return turns


def map_messages_to_turns(turns: Sequence[TurnBoundary], message_count: int) -> list[TurnBoundary | None]:
    """Per-message lookup of the owning turn."""
    owners: list[TurnBoundary | None] = [None] * message_count
    for turn in turns:
        for i in range(turn.start_index, turn.end_index + 1):
            owners[i] = turn
    return owners
