"""Clone a session into a new, optionally reduced, session."""

import uuid
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from occ.compaction.service import remove_tool_calls
from occ.config.presets import resolve_tool_removal_options
from occ.config.schema import Config
from occ.errors import CloneOperationError, OccError
from occ.operations.statistics import calculate_operation_statistics
from occ.operations.types import CloneOptions, CloneResult
from occ.session.manager import SessionStore
from occ.session.models import Entry, SessionHeader
from occ.session.parser import count_tool_calls, is_message_entry

RESUME_COMMAND = "openclaw resume"


def generate_session_id() -> str:
    return str(uuid.uuid4())


def _stamp_header(entries: list[Entry], new_session_id: str, source_session_id: str) -> list[Entry]:
    cloned_at = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    stamped: list[Entry] = []
    for entry in entries:
        if isinstance(entry, SessionHeader):
            entry = entry.with_id(new_session_id, clonedFrom=source_session_id, clonedAt=cloned_at)
        stamped.append(entry)
    return stamped


def execute_clone(config: Config, options: CloneOptions) -> CloneResult:
    """
    Copy a session under a new UUID, reducing tool calls if requested.

    The clone is registered in the session index unless no_register is set
    or an explicit output path is given. The source file is only read.

    Raises:
        AgentNotFoundError, SessionNotFoundError, AmbiguousSessionError,
        UnknownPresetError: resolution failed.
        CloneOperationError: reading, reducing or writing failed.
    """
    store = SessionStore.from_config(config, options.agent_id)
    source_id = store.resolve(options.source_session_id)
    source_path = store.session_path(source_id)
    policy = resolve_tool_removal_options(options.tool_removal) if options.tool_removal else None

    try:
        size_original = store.file_size(source_path)
        entries = store.read_entries(source_path, strict=config.strict_parsing)

        tool_calls_original = count_tool_calls(entries)
        messages_original = sum(1 for e in entries if is_message_entry(e))

        processed = entries
        removed = truncated = 0
        if policy is not None:
            result = remove_tool_calls(entries, policy)
            processed = result.entries
            removed = result.statistics.tool_calls_removed
            truncated = result.statistics.tool_calls_truncated

        new_id = generate_session_id()
        processed = _stamp_header(processed, new_id, source_id)

        output_path = Path(options.output_path).expanduser() if options.output_path else store.session_path(new_id)
        store.write_entries(output_path, processed)

        if not options.no_register and not options.output_path:
            store.register(new_id, displayName=f"Clone of {source_id[:8]}")

        statistics = calculate_operation_statistics(
            size_original=size_original,
            size_after=store.file_size(output_path),
            messages_original=messages_original,
            messages_after=sum(1 for e in processed if is_message_entry(e)),
            tool_calls_original=tool_calls_original,
            tool_calls_removed=removed,
            tool_calls_truncated=truncated,
        )
    except (OccError, OSError) as e:
        message = e.message if isinstance(e, OccError) else str(e)
        raise CloneOperationError(f"Failed to clone session '{source_id}': {message}") from e

    logger.info(f"Cloned {source_id} to {new_id} ({output_path})")
    return CloneResult(
        source_session_id=source_id,
        cloned_session_id=new_id,
        cloned_session_path=str(output_path),
        statistics=statistics,
        resume_command=f"{RESUME_COMMAND} {new_id}",
    )
