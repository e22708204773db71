"""Undo an edit from the latest backup."""

from occ.config.schema import Config
from occ.operations.types import RestoreResult
from occ.session.backup import restore_from_backup
from occ.session.manager import SessionStore


def execute_restore(config: Config, session_id: str, agent_id: str | None = None) -> RestoreResult:
    """
    Overwrite a session with its most recent backup.

    Raises:
        RestoreError: the session has no backup.
    """
    store = SessionStore.from_config(config, agent_id)
    resolved = store.resolve(session_id)
    backup_path = restore_from_backup(store, resolved)
    store.touch(resolved)
    return RestoreResult(session_id=resolved, backup_path=str(backup_path))
