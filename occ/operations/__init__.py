"""Session operations behind the CLI commands."""

from occ.operations.clone import execute_clone, generate_session_id
from occ.operations.edit import execute_edit
from occ.operations.info import analyze_session, get_session_info, list_sessions
from occ.operations.restore import execute_restore
from occ.operations.statistics import calculate_operation_statistics
from occ.operations.types import (
    CloneOptions,
    CloneResult,
    EditOptions,
    EditResult,
    OperationStatistics,
    RestoreResult,
    SessionInfo,
)

__all__ = [
    # Operations
    "execute_edit",
    "execute_clone",
    "execute_restore",
    "get_session_info",
    "list_sessions",
    "analyze_session",
    "generate_session_id",
    "calculate_operation_statistics",
    # Types
    "EditOptions",
    "CloneOptions",
    "EditResult",
    "CloneResult",
    "RestoreResult",
    "OperationStatistics",
    "SessionInfo",
]
