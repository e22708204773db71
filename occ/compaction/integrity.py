"""Orphan cleanup between tool calls and tool results.

Runs after the tier pass. Both passes look only at id membership among the
surviving messages, never at turn tiers. Messages travel as
``(input position, message)`` pairs.
"""

from typing import Iterable

from occ.compaction.turns import get_tool_call_ids
from occ.session.models import MessageEntry, ToolCallBlock

IndexedMessage = tuple[int, MessageEntry]


def surviving_tool_call_ids(messages: Iterable[MessageEntry]) -> set[str]:
    """IDs of every tool-call block present."""
    ids: set[str] = set()
    for message in messages:
        ids.update(get_tool_call_ids(message))
    return ids


def surviving_tool_result_ids(messages: Iterable[MessageEntry]) -> set[str]:
    """toolCallId of every tool-result message present."""
    return {
        m.tool_call_id
        for m in messages
        if m.role == "toolResult" and m.tool_call_id
    }


def is_orphaned_tool_result(message: MessageEntry, call_ids: set[str]) -> bool:
    """A tool result with no toolCallId, or one that matches no surviving call."""
    if message.role != "toolResult":
        return False
    return not message.tool_call_id or message.tool_call_id not in call_ids


def prune_orphaned_tool_calls(message: MessageEntry, result_ids: set[str]) -> MessageEntry:
    """Drop tool calls in an assistant message that no tool result answers.

    The same object is returned when nothing was dropped.
    """
    content = message.content
    if message.role != "assistant" or isinstance(content, str):
        return message

    filtered = tuple(
        block for block in content
        if not isinstance(block, ToolCallBlock) or block.id in result_ids
    )
    if len(filtered) == len(content):
        return message
    return message.with_content(filtered)


def drop_orphaned_tool_results(pairs: list[IndexedMessage]) -> list[IndexedMessage]:
    """Pass 1: remove tool results whose call is gone."""
    call_ids = surviving_tool_call_ids(m for _, m in pairs)
    return [(i, m) for i, m in pairs if not is_orphaned_tool_result(m, call_ids)]


def drop_orphaned_tool_calls(pairs: list[IndexedMessage]) -> list[IndexedMessage]:
    """Pass 2: remove tool calls that never got a result (interrupted sessions)."""
    result_ids = surviving_tool_result_ids(m for _, m in pairs)
    return [(i, prune_orphaned_tool_calls(m, result_ids)) for i, m in pairs]
