"""Tool-call reduction for session transcripts."""

from occ.compaction.classifier import classify_turns
from occ.compaction.estimator import estimate_tokens, estimate_messages_tokens
from occ.compaction.integrity import drop_orphaned_tool_calls, drop_orphaned_tool_results
from occ.compaction.reducer import reduce_content
from occ.compaction.service import reduce_tool_calls, remove_tool_calls
from occ.compaction.stats import calculate_statistics
from occ.compaction.truncation import truncate_arguments, truncate_tool_result
from occ.compaction.turns import identify_turn_boundaries
from occ.compaction.types import (
    ReductionResult,
    ReductionStatistics,
    ToolRemovalPolicy,
    ToolRemovalResult,
    TurnBoundary,
    TurnClassification,
)

__all__ = [
    # Segmentation
    "identify_turn_boundaries",
    # Classification
    "classify_turns",
    # Content
    "reduce_content",
    "truncate_arguments",
    "truncate_tool_result",
    # Integrity
    "drop_orphaned_tool_results",
    "drop_orphaned_tool_calls",
    # Statistics
    "calculate_statistics",
    # Estimator
    "estimate_tokens",
    "estimate_messages_tokens",
    # Service
    "reduce_tool_calls",
    "remove_tool_calls",
    # Types
    "ReductionResult",
    "ReductionStatistics",
    "ToolRemovalPolicy",
    "ToolRemovalResult",
    "TurnBoundary",
    "TurnClassification",
]
