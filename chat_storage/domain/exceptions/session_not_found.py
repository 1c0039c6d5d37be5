"""
SessionNotFoundError - Raised when a session does not exist for the caller.
Maps to: HTTP 404 Not Found

Missing and foreign-owned sessions raise the same error so that session ids
cannot be probed.
"""


class SessionNotFoundError(Exception):
    """Exception raised when no session with the id is owned by the caller."""

    def __init__(self, session_id):
        super().__init__(f"Session not found with id: {session_id}")
        self.session_id = session_id
