from __future__ import annotations

class DraftMinerError(Exception):
    pass

class ExtractorStateError(DraftMinerError):
    """Extractor used out of order, e.g. try_finalize() before any mine_reply()."""

class ChatClientError(DraftMinerError):
    """Backend unreachable or returned an error after all retries."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status
