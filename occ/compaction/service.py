"""Tool-call reduction entry points."""

from typing import Sequence

from loguru import logger

from occ.compaction.classifier import classify_turns
from occ.compaction.integrity import drop_orphaned_tool_calls, drop_orphaned_tool_results
from occ.compaction.reducer import reduce_content
from occ.compaction.stats import calculate_statistics
from occ.compaction.turns import identify_turn_boundaries
from occ.compaction.types import (
    ReductionResult,
    ToolRemovalPolicy,
    ToolRemovalResult,
    TurnClassification,
)
from occ.session.models import Entry, MessageEntry


def reduce_tool_calls(
    messages: Sequence[MessageEntry],
    policy: ToolRemovalPolicy,
) -> ReductionResult:
    """
    Remove, truncate or preserve tool-call content turn by turn.

    Steps:
    1. Segment messages into turns
    2. Classify tool-bearing turns: remove (oldest), truncate, preserve (newest)
    3. Rewrite messages per tier, stripping thinking blocks everywhere
    4. Drop tool results whose call is gone
    5. Drop tool calls whose result is gone

    A session with no tool-bearing turns is returned unchanged. Never raises
    for well-typed input.

    Args:
        messages: Message entries in file order, header excluded.
        policy: Resolved reduction policy.

    Returns:
        ReductionResult with the surviving messages, their input positions
        and statistics.
    """
    turns = identify_turn_boundaries(messages)
    turns_with_tools = [t for t in turns if t.has_tool_calls]

    if not turns_with_tools:
        kept = list(messages)
        return ReductionResult(
            messages=kept,
            statistics=calculate_statistics([], TurnClassification(), messages, kept),
            source_indices=list(range(len(kept))),
        )

    classification = classify_turns(turns_with_tools, policy)
    logger.debug(
        f"{len(turns_with_tools)} tool-bearing turns of {len(turns)}: "
        f"{len(classification.remove)} remove, {len(classification.truncate)} truncate, "
        f"{len(classification.preserve)} preserve"
    )

    reduced = reduce_content(messages, turns, classification)

    pairs = list(zip(reduced.source_indices, reduced.messages))
    pairs = drop_orphaned_tool_results(pairs)
    pairs = drop_orphaned_tool_calls(pairs)

    final_messages = [message for _, message in pairs]
    statistics = calculate_statistics(
        turns_with_tools,
        classification,
        messages,
        final_messages,
        tool_calls_truncated=reduced.tool_calls_truncated,
        thinking_blocks_removed=reduced.thinking_blocks_removed,
    )

    return ReductionResult(
        messages=final_messages,
        statistics=statistics,
        source_indices=[index for index, _ in pairs],
    )


def remove_tool_calls(entries: Sequence[Entry], policy: ToolRemovalPolicy) -> ToolRemovalResult:
    """
    Reduce a full entry list.

    The header and any non-message lines keep their positions; message
    entries are replaced by their reduced form or dropped.
    """
    messages = [e for e in entries if isinstance(e, MessageEntry)]
    result = reduce_tool_calls(messages, policy)
    survivors = dict(zip(result.source_indices, result.messages))

    processed: list[Entry] = []
    message_index = 0
    for entry in entries:
        if isinstance(entry, MessageEntry):
            if message_index in survivors:
                processed.append(survivors[message_index])
            message_index += 1
        else:
            processed.append(entry)

    return ToolRemovalResult(entries=processed, statistics=result.statistics)
