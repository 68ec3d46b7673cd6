from dev_studio_mcp.models.session import ShellSession


class SessionManager:
    """Manages shell sessions for all open terminals."""

    def __init__(self) -> None:
        # Sessions are ephemeral and never persisted.
        self._storage: dict[str, ShellSession] = {}

    def get_session(self, session_id: str = "default") -> ShellSession:
        """Returns or creates the session for a given terminal."""
        if session_id not in self._storage:
            self._storage[session_id] = ShellSession()
        return self._storage[session_id]

    def close_session(self, session_id: str) -> bool:
        """Discards a terminal's session. Returns False if it was not open."""
        return self._storage.pop(session_id, None) is not None
