import asyncio

import pytest

from aurora_oracle.chat import ChatRegistry, ChatSession
from aurora_oracle.config import _Config
from aurora_oracle.errors import ProviderError, SessionNotFound
from aurora_oracle.fallback import DEMO_CHAT_REPLY
from aurora_oracle.prompts import CHAT_FAILURE_REPLY, CHAT_GREETING


class SlowResponder:
    """Replies after a delay that shrinks with each call, so unserialized sends would finish out of order."""

    def __init__(self) -> None:
        self.delays = [0.05, 0.0]
        self.seen = []

    async def send(self, message: str) -> str:
        self.seen.append(message)
        await asyncio.sleep(self.delays.pop(0) if self.delays else 0)
        return f"re: {message}"


class FlakyResponder:
    def __init__(self) -> None:
        self.fail_next = True

    async def send(self, message: str) -> str:
        if self.fail_next:
            self.fail_next = False
            raise ProviderError("503 service unavailable")
        return "Dress in layers and bring a headlamp."


def test_session_starts_with_greeting():
    session = ChatSession(SlowResponder())
    (greeting,) = session.transcript
    assert greeting.role == "model"
    assert greeting.text == CHAT_GREETING


def test_sends_are_serialized_in_submission_order():
    responder = SlowResponder()
    session = ChatSession(responder)

    async def both():
        return await asyncio.gather(session.send("first"), session.send("second"))

    first, second = asyncio.run(both())
    assert first.text == "re: first"
    assert second.text == "re: second"
    assert responder.seen == ["first", "second"]
    assert [(m.role, m.text) for m in session.transcript[1:]] == [
        ("user", "first"),
        ("model", "re: first"),
        ("user", "second"),
        ("model", "re: second"),
    ]


def test_failed_turn_is_apologised_for_and_session_survives():
    session = ChatSession(FlakyResponder())

    async def talk():
        return await session.send("Is it safe to hike at night?"), await session.send("And now?")

    failed, recovered = asyncio.run(talk())
    assert failed.role == "model"
    assert failed.text == CHAT_FAILURE_REPLY
    assert recovered.text == "Dress in layers and bring a headlamp."
    assert len(session.transcript) == 5


def test_blank_message_rejected():
    session = ChatSession(SlowResponder())
    with pytest.raises(ValueError):
        asyncio.run(session.send("   "))
    assert len(session.transcript) == 1


def test_transcript_is_a_copy():
    session = ChatSession(SlowResponder())
    snapshot = session.transcript
    asyncio.run(session.send("hello"))
    assert len(snapshot) == 1
    assert len(session.transcript) == 3


def test_demo_session_keeps_prior_turns(demo_capability):
    registry = ChatRegistry(demo_capability)
    _, session = registry.create()

    async def talk():
        await session.send("What is Bz?")
        before = session.transcript
        reply = await session.send("What is Kp?")
        return before, reply

    before, reply = asyncio.run(talk())
    assert reply.text == DEMO_CHAT_REPLY
    assert session.transcript[: len(before)] == before


def test_registry_lifecycle(demo_capability):
    registry = ChatRegistry(demo_capability)
    session_id, session = registry.create()
    other_id, other = registry.create()
    assert session_id != other_id
    assert registry.get(session_id) is session
    assert len(registry) == 2

    registry.discard(session_id)
    with pytest.raises(SessionNotFound):
        registry.get(session_id)
    with pytest.raises(SessionNotFound):
        registry.discard(session_id)
    assert registry.get(other_id) is other


class ManualClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_idle_sessions_expire(demo_capability):
    clock = ManualClock()
    registry = ChatRegistry(demo_capability, ttl_seconds=60, clock=clock)
    session_id, _ = registry.create()

    clock.now += 61
    with pytest.raises(SessionNotFound):
        registry.get(session_id)
    assert len(registry) == 0


def test_touching_a_session_slides_its_expiry(demo_capability):
    clock = ManualClock()
    registry = ChatRegistry(demo_capability, ttl_seconds=60, clock=clock)
    session_id, session = registry.create()

    for _ in range(3):
        clock.now += 45
        assert registry.get(session_id) is session


def test_create_sweeps_abandoned_sessions(demo_capability):
    clock = ManualClock()
    registry = ChatRegistry(demo_capability, ttl_seconds=60, clock=clock)
    for _ in range(5):
        registry.create()

    clock.now += 120
    fresh_id, _ = registry.create()
    assert len(registry) == 1
    assert registry.get(fresh_id)


def test_session_ttl_config():
    assert _Config({}).chat_session_ttl_sec == 1800.0
    assert _Config({"CHAT_SESSION_TTL_SEC": "90"}).chat_session_ttl_sec == 90.0
    assert _Config({"CHAT_SESSION_TTL_SEC": "-1"}).chat_session_ttl_sec == 1800.0
