"""Types for tool-call reduction."""

from dataclasses import dataclass, field
from typing import Literal

from occ.session.models import Entry, MessageEntry

Tier = Literal["remove", "truncate", "preserve"]

# Truncation limits (whichever is hit first)
MAX_CHARS = 120
MAX_LINES = 2

ARGUMENT_MARKER = "..."
CONTENT_MARKER = "[truncated]"


@dataclass(frozen=True)
class ToolRemovalPolicy:
    """Resolved reduction policy.

    keep_turns_with_tools: how many of the newest tool-bearing turns survive.
    truncate_percent: share (0-100) of the kept turns, oldest first, whose
        tool content is truncated instead of preserved.
    """

    keep_turns_with_tools: int
    truncate_percent: float

    def __post_init__(self) -> None:
        if self.keep_turns_with_tools < 0:
            raise ValueError("keep_turns_with_tools must be >= 0")
        if not 0 <= self.truncate_percent <= 100:
            raise ValueError("truncate_percent must be between 0 and 100")


@dataclass(frozen=True)
class TurnBoundary:
    """A contiguous, inclusive range of message indices."""

    start_index: int
    end_index: int
    turn_index: int
    has_tool_calls: bool

    def __contains__(self, index: int) -> bool:
        return self.start_index <= index <= self.end_index

    def __len__(self) -> int:
        return self.end_index - self.start_index + 1


@dataclass
class TurnClassification:
    """Tool-bearing turn indices partitioned into tiers, oldest first."""

    remove: list[int] = field(default_factory=list)
    truncate: list[int] = field(default_factory=list)
    preserve: list[int] = field(default_factory=list)

    def tier_of(self, turn_index: int) -> Tier | None:
        """Tier for a turn, or None for turns that were never classified."""
        if turn_index in self.remove:
            return "remove"
        if turn_index in self.truncate:
            return "truncate"
        if turn_index in self.preserve:
            return "preserve"
        return None


@dataclass
class ReductionStatistics:
    """Before/after counts for one reduction run."""

    turns_with_tools_total: int = 0
    turns_with_tools_removed: int = 0
    turns_with_tools_truncated: int = 0
    turns_with_tools_preserved: int = 0
    tool_calls_original: int = 0
    tool_calls_removed: int = 0
    tool_calls_truncated: int = 0
    thinking_blocks_removed: int = 0
    messages_original: int = 0
    messages_after: int = 0
    size_original: int = 0
    size_after: int = 0
    reduction_percent: float = 0.0


@dataclass
class ReductionResult:
    """Output of reduce_tool_calls.

    source_indices[i] is the input position of messages[i].
    """

    messages: list[MessageEntry]
    statistics: ReductionStatistics
    source_indices: list[int]


@dataclass
class ToolRemovalResult:
    """Output of remove_tool_calls over a full entry list."""

    entries: list[Entry]
    statistics: ReductionStatistics
