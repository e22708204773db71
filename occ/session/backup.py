"""Numbered session backups with rotation."""

import re
from pathlib import Path

from loguru import logger

from occ.errors import RestoreError
from occ.session.manager import SessionStore
from occ.session.paths import get_backup_path

MAX_BACKUPS = 5


def _backup_path(store: SessionStore, session_id: str, number: int) -> Path:
    return get_backup_path(store.state_dir, session_id, number, store.agent_id)


def get_backup_numbers(store: SessionStore, session_id: str) -> list[int]:
    """Existing backup numbers for a session, ascending."""
    if not store.sessions_dir.is_dir():
        return []

    pattern = re.compile(rf"^{re.escape(session_id)}\.backup\.(\d+)\.jsonl$")
    numbers = []
    for path in store.sessions_dir.iterdir():
        match = pattern.match(path.name)
        if match:
            numbers.append(int(match.group(1)))
    return sorted(numbers)


def find_latest_backup(store: SessionStore, session_id: str) -> Path | None:
    numbers = get_backup_numbers(store, session_id)
    if not numbers:
        return None
    return _backup_path(store, session_id, numbers[-1])


def rotate_backups(store: SessionStore, session_id: str, max_backups: int = MAX_BACKUPS) -> list[Path]:
    """Delete the oldest backups beyond max_backups. Returns the deleted paths."""
    numbers = get_backup_numbers(store, session_id)
    if len(numbers) <= max_backups:
        return []

    deleted = []
    for number in numbers[: len(numbers) - max_backups]:
        path = _backup_path(store, session_id, number)
        path.unlink(missing_ok=True)
        deleted.append(path)
        logger.debug(f"Rotated out backup {path.name}")
    return deleted


def create_backup(store: SessionStore, session_id: str) -> Path:
    """
    Copy a session to its next backup slot.

    Numbering is monotonic: the new backup is one past the highest existing
    number, so a restore always picks the most recent copy even after
    rotation.

    Returns:
        Path of the new backup.
    """
    numbers = get_backup_numbers(store, session_id)
    next_number = numbers[-1] + 1 if numbers else 1

    backup_path = _backup_path(store, session_id, next_number)
    store.copy_file(store.session_path(session_id), backup_path)
    logger.debug(f"Backed up {session_id} to {backup_path.name}")

    rotate_backups(store, session_id)
    return backup_path


def restore_from_backup(store: SessionStore, session_id: str) -> Path:
    """
    Overwrite a session with its most recent backup.

    Raises:
        RestoreError: if the session has no backup.
    """
    backup_path = find_latest_backup(store, session_id)
    if backup_path is None:
        raise RestoreError(f"No backup found for session '{session_id}'")

    store.copy_file(backup_path, store.session_path(session_id))
    logger.info(f"Restored {session_id} from {backup_path.name}")
    return backup_path
