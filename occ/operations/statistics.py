"""Statistics shared by edit and clone."""

from occ.compaction.stats import reduction_percent
from occ.operations.types import OperationStatistics


def calculate_operation_statistics(
    size_original: int,
    size_after: int,
    messages_original: int,
    messages_after: int,
    tool_calls_original: int,
    tool_calls_removed: int = 0,
    tool_calls_truncated: int = 0,
) -> OperationStatistics:
    """
    Build operation statistics from file sizes and counts.

    Args:
        size_original: Size of the source file in bytes.
        size_after: Size of the written file in bytes.
        messages_original: Message entries before reduction.
        messages_after: Message entries after reduction.
        tool_calls_original: Tool calls before reduction.
        tool_calls_removed: Tool calls no longer present.
        tool_calls_truncated: Tool calls kept with shortened arguments.

    Returns:
        OperationStatistics. Truncated calls count as preserved.
    """
    return OperationStatistics(
        messages_original=messages_original,
        messages_after=messages_after,
        tool_calls_original=tool_calls_original,
        tool_calls_removed=tool_calls_removed,
        tool_calls_truncated=tool_calls_truncated,
        tool_calls_preserved=tool_calls_original - tool_calls_removed,
        size_original=size_original,
        size_after=size_after,
        reduction_percent=reduction_percent(size_original, size_after),
    )
