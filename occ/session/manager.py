"""Session storage: discovery, atomic JSONL reads/writes and the session index."""

import json
import os
import secrets
import time
from pathlib import Path
from typing import Any, Iterable

from loguru import logger

from occ.errors import (
    AgentNotFoundError,
    AmbiguousSessionError,
    NoSessionsError,
    SessionNotFoundError,
)
from occ.session.models import Entry
from occ.session.parser import (
    ParsedSession,
    parse_jsonl,
    parse_jsonl_safe,
    separate_header_and_messages,
    serialize_jsonl,
)
from occ.session.paths import (
    DEFAULT_AGENT_ID,
    get_agents_directory,
    get_session_index_path,
    get_session_path,
    get_sessions_directory,
    get_state_directory,
    is_session_file,
    resolve_agent_id,
)

# Corrupt lines reported individually before switching to a summary
_MAX_REPORTED_CORRUPT_LINES = 3


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write via a temp file in the same directory, then rename over path."""
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = path.with_suffix(f".tmp.{secrets.token_hex(4)}")
    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        # Atomic rename (POSIX guarantees this is atomic on same filesystem)
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up temp file on failure
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


class SessionStore:
    """
    Sessions of one agent under a state directory.

    Layout: <state_dir>/agents/<agent_id>/sessions/<session_id>.jsonl with a
    sessions.json index next to the transcripts.
    """

    def __init__(self, state_dir: Path, agent_id: str = DEFAULT_AGENT_ID):
        self.state_dir = state_dir
        self.agent_id = agent_id

    @classmethod
    def from_config(cls, config, agent_id: str | None = None) -> "SessionStore":
        """Store for the configured state dir; agent_id beats the configured agent."""
        return cls(
            get_state_directory(config.state_dir),
            resolve_agent_id(agent_id, config.agent_id),
        )

    @property
    def sessions_dir(self) -> Path:
        return get_sessions_directory(self.state_dir, self.agent_id)

    @property
    def index_path(self) -> Path:
        return get_session_index_path(self.state_dir, self.agent_id)

    def session_path(self, session_id: str) -> Path:
        return get_session_path(self.state_dir, session_id, self.agent_id)

    # ── Discovery ───────────────────────────────────────────────────

    def agent_exists(self) -> bool:
        return self.sessions_dir.is_dir()

    def list_agents(self) -> list[str]:
        """Agent IDs with a directory under the state dir."""
        agents_dir = get_agents_directory(self.state_dir)
        if not agents_dir.is_dir():
            return []
        return sorted(p.name for p in agents_dir.iterdir() if p.is_dir())

    def ensure_agent(self) -> None:
        """Raise AgentNotFoundError (with the available agents) if missing."""
        if not self.agent_exists():
            available = self.list_agents()
            raise AgentNotFoundError(
                f"Agent '{self.agent_id}' not found",
                available or None,
            )

    def session_files(self) -> list[Path]:
        """Live session transcripts, backups and temp files excluded."""
        if not self.sessions_dir.is_dir():
            return []
        return [p for p in self.sessions_dir.iterdir() if p.is_file() and is_session_file(p)]

    def current_session(self) -> str:
        """
        ID of the most recently modified session.

        Uses file mtimes rather than the index, since the index may not
        reflect edits made by other tools.
        """
        files = self.session_files()
        if not files:
            raise NoSessionsError(self.agent_id)
        newest = max(files, key=lambda p: p.stat().st_mtime)
        return newest.stem

    def find_matching(self, partial: str) -> list[str]:
        """Session IDs starting with partial."""
        return sorted(p.stem for p in self.session_files() if p.stem.startswith(partial))

    def resolve(self, session_id: str | None) -> str:
        """
        Resolve a full ID, unique prefix, or None (most recent) to a session ID.

        Raises:
            AgentNotFoundError: agent directory missing.
            NoSessionsError: session_id is None and the agent has no sessions.
            SessionNotFoundError: nothing matches.
            AmbiguousSessionError: more than one session matches the prefix.
        """
        self.ensure_agent()

        if not session_id:
            return self.current_session()

        if self.session_path(session_id).is_file():
            return session_id

        matches = self.find_matching(session_id)
        if not matches:
            raise SessionNotFoundError(session_id)
        if len(matches) == 1:
            return matches[0]
        raise AmbiguousSessionError(session_id, matches)

    # ── Transcripts ─────────────────────────────────────────────────

    def read_entries(self, path: Path, strict: bool = False) -> list[Entry]:
        """
        Read and parse a transcript.

        Args:
            path: Session file.
            strict: Raise SessionParseError on the first corrupt line instead
                of skipping corrupt lines with a warning.

        Raises:
            SessionNotFoundError: path does not exist.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise SessionNotFoundError(str(path)) from None

        if strict:
            return parse_jsonl(text)

        result = parse_jsonl_safe(text)
        for error in result.errors[:_MAX_REPORTED_CORRUPT_LINES]:
            logger.warning(f"Skipped corrupt line {error.line_number} in {path.name}: {error.error}")
        if result.errors:
            logger.warning(f"{path.name}: loaded with {len(result.errors)} corrupt line(s) skipped")

        return result.entries

    def read_session(self, path: Path, strict: bool = False) -> ParsedSession:
        """Read a transcript and split header from messages."""
        return separate_header_and_messages(self.read_entries(path, strict), str(path))

    def write_entries(self, path: Path, entries: Iterable[Entry]) -> None:
        """Write entries atomically. The target is untouched on failure."""
        atomic_write_bytes(path, serialize_jsonl(entries).encode("utf-8"))

    def copy_file(self, source: Path, dest: Path) -> None:
        """Copy a file atomically."""
        atomic_write_bytes(dest, source.read_bytes())

    def file_size(self, path: Path) -> int:
        try:
            return path.stat().st_size
        except FileNotFoundError:
            raise SessionNotFoundError(str(path)) from None

    # ── Index ───────────────────────────────────────────────────────

    def read_index(self) -> dict[str, dict[str, Any]]:
        """The sessions.json index; empty if it does not exist yet."""
        try:
            data = json.loads(self.index_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            logger.warning(f"Corrupt session index {self.index_path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_index(self, index: dict[str, dict[str, Any]]) -> None:
        atomic_write_bytes(self.index_path, json.dumps(index, indent=2).encode("utf-8"))

    def sessions_by_time(self) -> list[dict[str, Any]]:
        """
        Index entries, newest first.

        Without an index, falls back to the transcripts on disk ordered by mtime.
        """
        index = self.read_index()
        if index:
            entries = [e for e in index.values() if isinstance(e, dict)]
            return sorted(entries, key=lambda e: e.get("updatedAt", 0), reverse=True)

        files = sorted(self.session_files(), key=lambda p: p.stat().st_mtime, reverse=True)
        return [
            {"sessionId": p.stem, "updatedAt": int(p.stat().st_mtime * 1000)}
            for p in files
        ]

    def register(self, session_id: str, **metadata: Any) -> None:
        """Add or replace a session in the index."""
        index = self.read_index()
        index[session_id] = {
            "sessionId": session_id,
            "updatedAt": int(time.time() * 1000),
            **metadata,
        }
        self._write_index(index)

    def touch(self, session_id: str) -> None:
        """Bump a session's updatedAt if it is in the index."""
        index = self.read_index()
        entry = index.get(session_id)
        if isinstance(entry, dict):
            entry["updatedAt"] = int(time.time() * 1000)
            self._write_index(index)
