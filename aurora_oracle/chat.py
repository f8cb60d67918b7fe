"""Chat sessions: an owned responder plus the locally mirrored transcript."""

import asyncio
import logging
import time
import uuid
from typing import Any, Callable, Dict, Tuple

from .capability import AuroraCapability, ChatResponder
from .errors import ProviderError, SessionNotFound
from .models import ChatMessage
from .prompts import CHAT_FAILURE_REPLY, CHAT_GREETING


def _message(role: str, text: str) -> ChatMessage:
    return ChatMessage(
        id=uuid.uuid4().hex,
        role=role,
        text=text,
        timestamp=int(time.time() * 1000),
    )


class ChatSession:
    """One conversation with the model.

    The provider keeps the real conversational state, so turns must reach it
    in submission order: ``send`` holds a lock for the whole round trip. A
    failed turn is answered with a fixed apology and the session stays open.
    """

    def __init__(self, responder: ChatResponder) -> None:
        self._responder = responder
        self._lock = asyncio.Lock()
        self._messages = [_message("model", CHAT_GREETING)]

    @property
    def transcript(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    async def send(self, text: str) -> ChatMessage:
        if not text or not text.strip():
            raise ValueError("Message must not be blank")
        async with self._lock:
            self._messages.append(_message("user", text))
            try:
                reply = await self._responder.send(text)
            except ProviderError as e:
                logging.error("Chat turn failed: %s", e)
                reply = CHAT_FAILURE_REPLY
            answer = _message("model", reply)
            self._messages.append(answer)
            return answer


class ChatRegistry:
    """Process-local chat sessions keyed by id, with a sliding TTL.

    A session expires ``ttl_seconds`` after it was last touched; expired
    sessions are swept on every create/get. Nothing is persisted.
    """

    def __init__(
        self,
        capability: AuroraCapability,
        ttl_seconds: float = 1800.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._capability = capability
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # session_id -> {"session": ChatSession, "expires_at": float}
        self._items: Dict[str, Dict[str, Any]] = {}

    def _evict_expired(self, now: float) -> None:
        expired = [sid for sid, item in self._items.items() if item["expires_at"] <= now]
        for sid in expired:
            del self._items[sid]
        if expired:
            logging.info("Evicted %d idle chat session(s)", len(expired))

    def create(self) -> Tuple[str, ChatSession]:
        now = self._clock()
        self._evict_expired(now)
        session_id = uuid.uuid4().hex
        session = ChatSession(self._capability.create_chat())
        self._items[session_id] = {"session": session, "expires_at": now + self.ttl_seconds}
        return session_id, session

    def get(self, session_id: str) -> ChatSession:
        now = self._clock()
        self._evict_expired(now)
        item = self._items.get(session_id)
        if item is None:
            raise SessionNotFound(session_id)
        item["expires_at"] = now + self.ttl_seconds
        return item["session"]

    def discard(self, session_id: str) -> None:
        if self._items.pop(session_id, None) is None:
            raise SessionNotFound(session_id)

    def __len__(self) -> int:
        return len(self._items)
