class TorrentEngineError(Exception):
    """Base exception for torrent engine errors."""

    def __init__(self, message: str, display_message: str = None, status: int = None):
        self.message = message
        self.display_message = display_message or message
        self.status = status
        super().__init__(self.message)


class TorrentSessionNotFound(TorrentEngineError):
    """Raised when the engine no longer knows a session id."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            f"Torrent engine session {session_id} not found",
            "This torrent is no longer active, please start it again.",
            404,
        )
