"""Tier assignment for tool-bearing turns."""

import math
from typing import Sequence

from occ.compaction.types import ToolRemovalPolicy, TurnBoundary, TurnClassification


def classify_turns(
    turns_with_tools: Sequence[TurnBoundary],
    policy: ToolRemovalPolicy,
) -> TurnClassification:
    """
    Split tool-bearing turns into remove / truncate / preserve bands.

    The oldest turns beyond ``keep_turns_with_tools`` are removed. Of the kept
    turns, the oldest ``truncate_percent`` (rounded down) are truncated and the
    rest preserved, so the bands are contiguous in turn age.

    Args:
        turns_with_tools: Turns with has_tool_calls set. Tool-free turns must
            be filtered out by the caller.
        policy: Resolved reduction policy.

    Returns:
        Turn indices per tier, each list ascending.
    """
    ordered = sorted(turns_with_tools, key=lambda t: t.turn_index)
    total = len(ordered)

    keep_count = min(policy.keep_turns_with_tools, total)
    remove_count = total - keep_count
    truncate_count = math.floor(keep_count * policy.truncate_percent / 100)

    classification = TurnClassification()
    for position, turn in enumerate(ordered):
        if position < remove_count:
            classification.remove.append(turn.turn_index)
        elif position < remove_count + truncate_count:
            classification.truncate.append(turn.turn_index)
        else:
            classification.preserve.append(turn.turn_index)

    return classification
