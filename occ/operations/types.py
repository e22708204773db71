"""Types for session operations."""

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from occ.config.loader import convert_to_camel
from occ.config.presets import ToolRemovalOptions


@dataclass
class EditOptions:
    """Options for editing a session in place."""

    # None: most recently modified session
    session_id: str | None = None
    agent_id: str | None = None
    # None: no tool stripping
    tool_removal: ToolRemovalOptions | None = None


@dataclass
class CloneOptions:
    """Options for cloning a session."""

    source_session_id: str
    agent_id: str | None = None
    # None: <sessions dir>/<new id>.jsonl
    output_path: str | None = None
    tool_removal: ToolRemovalOptions | None = None
    no_register: bool = False


@dataclass
class OperationStatistics:
    """Before/after counts for an edit or clone."""

    messages_original: int = 0
    messages_after: int = 0
    tool_calls_original: int = 0
    tool_calls_removed: int = 0
    tool_calls_truncated: int = 0
    tool_calls_preserved: int = 0
    size_original: int = 0
    size_after: int = 0
    reduction_percent: float = 0.0


@dataclass
class EditResult:
    session_id: str
    backup_path: str
    statistics: OperationStatistics
    success: bool = True
    mode: Literal["edit"] = "edit"

    def to_dict(self) -> dict[str, Any]:
        return convert_to_camel(asdict(self))


@dataclass
class CloneResult:
    source_session_id: str
    cloned_session_id: str
    cloned_session_path: str
    statistics: OperationStatistics
    resume_command: str | None = None
    success: bool = True
    mode: Literal["clone"] = "clone"

    def to_dict(self) -> dict[str, Any]:
        return convert_to_camel(asdict(self))


@dataclass
class RestoreResult:
    session_id: str
    backup_path: str

    def to_dict(self) -> dict[str, Any]:
        return convert_to_camel(asdict(self))


@dataclass
class SessionInfo:
    """Summary of a session's contents."""

    session_id: str
    total_messages: int = 0
    user_messages: int = 0
    assistant_messages: int = 0
    tool_calls: int = 0
    tool_results: int = 0
    estimated_tokens: int = 0
    file_size_bytes: int = 0
    roles: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        roles = data.pop("roles")
        out = convert_to_camel(data)
        # Role names are transcript values, not field names
        out["roles"] = roles
        return out
