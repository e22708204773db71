"""Per-message content rewriting according to each turn's tier."""

from dataclasses import dataclass, field, replace
from typing import Sequence

from loguru import logger

from occ.compaction.truncation import truncate_arguments, truncate_tool_result
from occ.compaction.turns import map_messages_to_turns
from occ.compaction.types import TurnBoundary, TurnClassification
from occ.session.models import (
    ContentBlock,
    MessageEntry,
    TextBlock,
    ThinkingBlock,
    ToolCallBlock,
    compact_json,
)


@dataclass
class ContentReduction:
    """Messages surviving the tier pass, with their input positions."""
    messages: list[MessageEntry] = field(default_factory=list)
    source_indices: list[int] = field(default_factory=list)
    tool_calls_truncated: int = 0
    thinking_blocks_removed: int = 0

    def keep(self, index: int, message: MessageEntry) -> None:
        self.source_indices.append(index)
        self.messages.append(message)


def has_content(message: MessageEntry) -> bool:
    """
    Check if a message has anything worth keeping.

    String content counts when non-empty; block content counts when it holds
    a non-text block or a text block with non-empty text.
    """
    content = message.content
    if isinstance(content, str):
        return len(content) > 0
    return any(
        not isinstance(block, TextBlock) or len(block.text) > 0
        for block in content
    )


def remove_tool_calls_from_message(message: MessageEntry) -> MessageEntry:
    """Drop tool-call blocks. An emptied block list becomes one empty text block."""
    content = message.content
    if isinstance(content, str):
        return message

    filtered = tuple(block for block in content if not isinstance(block, ToolCallBlock))
    if len(filtered) == len(content):
        return message
    return message.with_content(filtered or (TextBlock(text=""),))


def truncate_tool_calls_in_message(message: MessageEntry) -> tuple[MessageEntry, int]:
    """
    Replace oversized tool-call arguments with a string preview.

    Returns:
        The rewritten message and the number of calls actually shortened.
        Calls whose arguments already fit are left untouched and uncounted.
    """
    content = message.content
    if isinstance(content, str):
        return message, 0

    truncated_count = 0
    processed: list[ContentBlock] = []
    for block in content:
        if isinstance(block, ToolCallBlock):
            original = block.arguments if isinstance(block.arguments, str) else compact_json(block.arguments)
            preview = truncate_arguments(block.arguments)
            if preview != original:
                truncated_count += 1
                block = replace(block, arguments=preview)
        processed.append(block)

    if not truncated_count:
        return message, 0
    return message.with_content(tuple(processed)), truncated_count


def truncate_tool_result_message(message: MessageEntry) -> MessageEntry:
    """Replace a tool result's content with its bounded string preview."""
    preview = truncate_tool_result(message.content)
    if preview == message.content:
        return message
    return message.with_content(preview)


def strip_thinking_blocks(message: MessageEntry) -> tuple[MessageEntry, int]:
    """Remove thinking blocks. Returns the message and the number removed."""
    content = message.content
    if isinstance(content, str):
        return message, 0

    filtered = tuple(block for block in content if not isinstance(block, ThinkingBlock))
    removed = len(content) - len(filtered)
    if not removed:
        return message, 0
    return message.with_content(filtered), removed


def reduce_content(
    messages: Sequence[MessageEntry],
    turns: Sequence[TurnBoundary],
    classification: TurnClassification,
    strip_thinking: bool = True,
) -> ContentReduction:
    """
    Apply each turn's tier to its messages.

    Tool-free turns pass through. In remove turns tool results are dropped and
    tool calls filtered out, keeping only messages that still have content.
    In truncate turns tool results and oversized arguments become previews.
    Preserve turns are untouched.

    With strip_thinking set, thinking blocks are then removed from every
    surviving message, in any turn. A message whose blocks were all thinking
    stays, with an empty block list.

    Args:
        messages: Message entries in file order.
        turns: Turn boundaries covering messages.
        classification: Tiers for the tool-bearing turns.
        strip_thinking: Remove thinking blocks everywhere.

    Returns:
        ContentReduction with surviving messages and counters.
    """
    result = ContentReduction()
    owners = map_messages_to_turns(turns, len(messages))

    for index, message in enumerate(messages):
        turn = owners[index]
        tier = classification.tier_of(turn.turn_index) if turn and turn.has_tool_calls else None

        if tier == "remove":
            if message.role == "toolResult":
                continue
            message = remove_tool_calls_from_message(message)
            if not has_content(message):
                continue
        elif tier == "truncate":
            if message.role == "toolResult":
                message = truncate_tool_result_message(message)
            else:
                message, count = truncate_tool_calls_in_message(message)
                result.tool_calls_truncated += count

        if strip_thinking:
            message, removed = strip_thinking_blocks(message)
            result.thinking_blocks_removed += removed
        result.keep(index, message)

    logger.debug(
        f"Content pass kept {len(result.messages)}/{len(messages)} messages, "
        f"truncated {result.tool_calls_truncated} tool calls, "
        f"stripped {result.thinking_blocks_removed} thinking blocks"
    )
    return result
