from __future__ import annotations

import logging
import random
import string
import time
from dataclasses import dataclass, field
from typing import Any

import requests

from .config import Settings
from .errors import ChatClientError
from .extractor import ConversationStateExtractor
from .models import SnapshotRecord

logger = logging.getLogger(__name__)


@dataclass
class ChatReply:
    text: str
    files: list[dict[str, Any]] = field(default_factory=list)
    history_id: int | None = None
    raw: dict[str, Any] = field(default_factory=dict)


def new_session_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"mobile_{int(time.time() * 1000)}_{suffix}"


class ChatClient:
    """
    Minimal client for the chat backend (POST /api/chat).
    - Session identity travels in the X-Session-ID header
    - Retries with exponential backoff on connection errors / 5xx
    - 4xx responses are not retried
    """
    def __init__(self, base_url: str, timeout_s: int = 90, max_retries: int = 3,
                 http: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.max_retries = max_retries
        self.http = http or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChatClient":
        return cls(settings.api_base_url, settings.api_timeout_s, settings.api_max_retries)

    def send(self, message: str, session_id: str, history_id: int | None = None,
             task_type: str | None = None) -> ChatReply:
        url = f"{self.base_url}/api/chat"
        payload: dict[str, Any] = {"message": message.strip()}
        if history_id:
            payload["history_id"] = history_id
        if task_type:
            payload["task_type"] = task_type
        headers = {"X-Session-ID": session_id}

        last_err: Exception | None = None
        for attempt in range(1, self.max_retries + 1):
            try:
                r = self.http.post(url, json=payload, headers=headers, timeout=self.timeout_s)
            except requests.RequestException as e:
                last_err = e
                logger.warning("chat request failed (attempt %d/%d): %s", attempt, self.max_retries, e)
                time.sleep(min(2 ** attempt, 8))
                continue

            if r.status_code >= 500:
                last_err = ChatClientError(f"Server error: {r.status_code}", r.status_code)
                logger.warning("chat backend returned %d (attempt %d/%d)", r.status_code, attempt, self.max_retries)
                time.sleep(min(2 ** attempt, 8))
                continue
            if r.status_code >= 400:
                raise ChatClientError(_error_message(r), r.status_code)

            try:
                data = r.json()
            except ValueError as e:
                raise ChatClientError("Invalid JSON from backend", r.status_code) from e
            if not isinstance(data, dict):
                raise ChatClientError("Invalid JSON from backend", r.status_code)
            hid = data.get("history_id")
            try:
                history_id = int(hid) if hid is not None else None
            except (TypeError, ValueError) as e:
                raise ChatClientError(f"Invalid history_id from backend: {hid!r}", r.status_code) from e
            return ChatReply(
                text=str(data.get("text") or ""),
                files=list(data.get("files") or []),
                history_id=history_id,
                raw=data,
            )

        if isinstance(last_err, ChatClientError):
            raise last_err
        raise ChatClientError(f"Backend unreachable: {last_err}")


def _error_message(r: requests.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        body = {}
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"Server error: {r.status_code}"


class ChatSession:
    """Per-session turn handler: one extractor, one session id, lock-step turns."""

    def __init__(self, client: ChatClient, extractor: ConversationStateExtractor | None = None,
                 session_id: str | None = None):
        self.client = client
        self.extractor = extractor or ConversationStateExtractor()
        self.session_id = session_id or new_session_id()
        self.history_id: int | None = None

    def send(self, text: str, flow_hint: str | None = None) -> tuple[ChatReply, SnapshotRecord | None]:
        self.extractor.notify_user_message(text, flow_hint)
        reply = self.client.send(text, self.session_id, self.history_id, flow_hint)
        if reply.history_id is not None and self.history_id is None:
            self.history_id = reply.history_id
        self.extractor.mine_reply(reply.text)
        return reply, self.extractor.try_finalize()

    def reset(self) -> str:
        self.session_id = new_session_id()
        self.history_id = None
        self.extractor.reset_session()
        logger.info("new session id %s", self.session_id)
        return self.session_id
