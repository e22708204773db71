"""On-disk layout of agent sessions."""

import os
from pathlib import Path

DEFAULT_AGENT_ID = "main"
SESSION_INDEX_FILE = "sessions.json"


def default_state_dir() -> Path:
    return Path.home() / ".clawdbot"


def get_state_directory(config_value: str | None = None) -> Path:
    """State directory. Priority: config value > CLAWDBOT_STATE_DIR > ~/.clawdbot."""
    if config_value:
        return Path(config_value).expanduser()
    env_value = os.environ.get("CLAWDBOT_STATE_DIR")
    if env_value:
        return Path(env_value).expanduser()
    return default_state_dir()


def resolve_agent_id(flag_value: str | None = None, config_value: str | None = None) -> str:
    """Agent ID. Priority: flag > config > CLAWDBOT_AGENT_ID > "main"."""
    return flag_value or config_value or os.environ.get("CLAWDBOT_AGENT_ID") or DEFAULT_AGENT_ID


def get_agents_directory(state_dir: Path) -> Path:
    return state_dir / "agents"


def get_sessions_directory(state_dir: Path, agent_id: str = DEFAULT_AGENT_ID) -> Path:
    return get_agents_directory(state_dir) / agent_id / "sessions"


def get_session_path(state_dir: Path, session_id: str, agent_id: str = DEFAULT_AGENT_ID) -> Path:
    return get_sessions_directory(state_dir, agent_id) / f"{session_id}.jsonl"


def get_session_index_path(state_dir: Path, agent_id: str = DEFAULT_AGENT_ID) -> Path:
    return get_sessions_directory(state_dir, agent_id) / SESSION_INDEX_FILE


def get_backup_path(
    state_dir: Path,
    session_id: str,
    backup_number: int,
    agent_id: str = DEFAULT_AGENT_ID,
) -> Path:
    """Backup file with monotonic numbering: <id>.backup.<n>.jsonl"""
    return get_sessions_directory(state_dir, agent_id) / f"{session_id}.backup.{backup_number}.jsonl"


def is_session_file(path: Path) -> bool:
    """A live session transcript: *.jsonl, not a backup or temp file."""
    name = path.name
    return name.endswith(".jsonl") and ".backup." not in name and not name.startswith(".tmp")
