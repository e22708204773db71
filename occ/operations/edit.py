"""Edit a session in place, keeping a backup."""

from loguru import logger

from occ.compaction.service import remove_tool_calls
from occ.config.presets import resolve_tool_removal_options
from occ.config.schema import Config
from occ.errors import EditOperationError, OccError
from occ.operations.statistics import calculate_operation_statistics
from occ.operations.types import EditOptions, EditResult
from occ.session.backup import create_backup
from occ.session.manager import SessionStore
from occ.session.parser import count_tool_calls, is_message_entry


def execute_edit(config: Config, options: EditOptions) -> EditResult:
    """
    Back up a session, reduce it and write it back over the original.

    Session and policy are resolved before any file is touched, so lookup
    and preset errors surface unwrapped.

    Raises:
        AgentNotFoundError, NoSessionsError, SessionNotFoundError,
        AmbiguousSessionError, UnknownPresetError: resolution failed.
        EditOperationError: anything after resolution failed. The original
            file is unchanged in that case.
    """
    store = SessionStore.from_config(config, options.agent_id)
    session_id = store.resolve(options.session_id)
    session_path = store.session_path(session_id)
    policy = resolve_tool_removal_options(options.tool_removal) if options.tool_removal else None

    try:
        size_original = store.file_size(session_path)
        entries = store.read_entries(session_path, strict=config.strict_parsing)

        tool_calls_original = count_tool_calls(entries)
        messages_original = sum(1 for e in entries if is_message_entry(e))

        backup_path = create_backup(store, session_id)

        processed = entries
        removed = truncated = 0
        if policy is not None:
            result = remove_tool_calls(entries, policy)
            processed = result.entries
            removed = result.statistics.tool_calls_removed
            truncated = result.statistics.tool_calls_truncated

        store.write_entries(session_path, processed)
        store.touch(session_id)

        statistics = calculate_operation_statistics(
            size_original=size_original,
            size_after=store.file_size(session_path),
            messages_original=messages_original,
            messages_after=sum(1 for e in processed if is_message_entry(e)),
            tool_calls_original=tool_calls_original,
            tool_calls_removed=removed,
            tool_calls_truncated=truncated,
        )
    except (OccError, OSError) as e:
        message = e.message if isinstance(e, OccError) else str(e)
        raise EditOperationError(f"Failed to edit session '{session_id}': {message}") from e

    logger.info(
        f"Edited {session_id}: {statistics.tool_calls_removed} tool calls removed, "
        f"{statistics.reduction_percent:.0f}% smaller"
    )
    return EditResult(
        session_id=session_id,
        backup_path=str(backup_path),
        statistics=statistics,
    )
