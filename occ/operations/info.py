"""Session inspection: info and list."""

from collections import Counter
from typing import Any, Sequence

from occ.compaction.estimator import estimate_messages_tokens
from occ.compaction.turns import get_tool_call_ids
from occ.config.schema import Config
from occ.operations.types import SessionInfo
from occ.session.manager import SessionStore
from occ.session.models import MessageEntry


def analyze_session(session_id: str, messages: Sequence[MessageEntry], file_size: int) -> SessionInfo:
    """Count messages per role, tool calls and results, and estimate tokens."""
    roles = Counter(m.role for m in messages)
    return SessionInfo(
        session_id=session_id,
        total_messages=len(messages),
        user_messages=roles.get("user", 0),
        assistant_messages=roles.get("assistant", 0),
        tool_calls=sum(len(get_tool_call_ids(m)) for m in messages),
        tool_results=roles.get("toolResult", 0),
        estimated_tokens=estimate_messages_tokens(messages),
        file_size_bytes=file_size,
        roles=dict(roles),
    )


def get_session_info(config: Config, session_id: str, agent_id: str | None = None) -> SessionInfo:
    """Resolve a session and analyze it."""
    store = SessionStore.from_config(config, agent_id)
    resolved = store.resolve(session_id)
    path = store.session_path(resolved)
    parsed = store.read_session(path, strict=config.strict_parsing)
    return analyze_session(resolved, parsed.messages, store.file_size(path))


def list_sessions(config: Config, agent_id: str | None = None, limit: int | None = None) -> list[dict[str, Any]]:
    """
    Sessions of an agent, newest first.

    Args:
        config: Loaded configuration.
        agent_id: Agent override.
        limit: Keep only the first N. Ignored unless positive.

    Raises:
        AgentNotFoundError: agent directory missing.
    """
    store = SessionStore.from_config(config, agent_id)
    store.ensure_agent()

    sessions = store.sessions_by_time()
    if limit is not None and limit > 0:
        sessions = sessions[:limit]
    return sessions
