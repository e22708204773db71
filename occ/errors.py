"""Error types for occ.

Every error carries a stable ``code`` so the CLI can attach a resolution hint
without matching on message text.
"""


class OccError(Exception):
    """Base error for all occ failures."""

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.message = message
        self.code = code


class SessionNotFoundError(OccError):
    """Session not found by ID, prefix or path."""

    def __init__(self, session_id: str):
        super().__init__(f"Session '{session_id}' not found", "SESSION_NOT_FOUND")
        self.session_id = session_id


class AmbiguousSessionError(OccError):
    """A partial session ID matches more than one session."""

    def __init__(self, partial: str, matches: list[str]):
        super().__init__(
            f"Multiple sessions match '{partial}': {', '.join(matches)}",
            "AMBIGUOUS_SESSION",
        )
        self.partial = partial
        self.matches = matches


class NoSessionsError(OccError):
    """The agent has no session files."""

    def __init__(self, agent_id: str):
        super().__init__(f"No sessions found for agent '{agent_id}'", "NO_SESSIONS")
        self.agent_id = agent_id


class AgentNotFoundError(OccError):
    """Agent directory does not exist."""

    def __init__(self, message: str, available_agents: list[str] | None = None):
        super().__init__(message, "AGENT_NOT_FOUND")
        self.available_agents = available_agents


class UnknownPresetError(OccError):
    """Requested preset is neither custom nor built in."""

    def __init__(self, preset_name: str):
        super().__init__(f"Unknown preset: {preset_name}", "UNKNOWN_PRESET")
        self.preset_name = preset_name


class EditOperationError(OccError):
    """Edit failed after the session was resolved. The original is unchanged."""

    def __init__(self, message: str):
        super().__init__(message, "EDIT_FAILED")


class CloneOperationError(OccError):
    """Clone failed. The source session is never touched."""

    def __init__(self, message: str):
        super().__init__(message, "CLONE_FAILED")


class RestoreError(OccError):
    """No backup to restore from, or the restore write failed."""

    def __init__(self, message: str):
        super().__init__(message, "RESTORE_FAILED")


class SessionParseError(OccError):
    """Strict parsing hit an undecodable line."""

    def __init__(self, line_number: int, reason: str):
        super().__init__(f"Malformed JSON at line {line_number}: {reason}", "PARSE_FAILED")
        self.line_number = line_number
        self.reason = reason


class MissingHeaderError(OccError):
    """Session file has no ``{"type": "session"}`` header line."""

    def __init__(self, file_path: str):
        super().__init__(f"Session file missing header: {file_path}", "MISSING_HEADER")
        self.file_path = file_path
