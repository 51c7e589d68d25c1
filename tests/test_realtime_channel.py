"""Async tests for the live session registry and the push publisher."""

from __future__ import annotations

import anyio
import pytest

from taskhub.domain.exceptions import AuthenticationError
from taskhub.infrastructure.notifications import (
    POLICY_VIOLATION,
    ConnectionState,
    NotificationPublisher,
    RealtimeChannel,
    build_notification_payload,
)

TOKENS = {"alice-token": 1, "bob-token": 2}


def fake_authenticator(token: str) -> int:
    try:
        return TOKENS[token]
    except KeyError:
        raise ValueError("Could not validate credentials") from None


class FakeSocket:
    def __init__(self, *, fail_on_send: bool = False) -> None:
        self.accepted = False
        self.closed_with: int | None = None
        self.sent: list[dict] = []
        self.fail_on_send = fail_on_send

    async def accept(self) -> None:
        self.accepted = True

    async def close(self, code: int = 1000) -> None:
        self.closed_with = code

    async def send_json(self, data) -> None:
        if self.fail_on_send:
            raise RuntimeError("connection reset")
        self.sent.append(data)


@pytest.fixture()
def channel():
    return RealtimeChannel(fake_authenticator)


@pytest.mark.anyio
async def test_handshake_joins_the_user_room(channel):
    socket = FakeSocket()

    session = await channel.handshake(socket, "alice-token")

    assert socket.accepted
    assert session.user_id == 1
    assert session.state is ConnectionState.JOINED
    assert channel.session_count(1) == 1


@pytest.mark.anyio
@pytest.mark.parametrize("token", [None, "", "forged-token"])
async def test_invalid_token_is_refused_and_never_joined(channel, token):
    socket = FakeSocket()

    with pytest.raises(AuthenticationError):
        await channel.handshake(socket, token)

    assert socket.closed_with == POLICY_VIOLATION
    assert not socket.accepted
    assert await channel.push_to_user(1, {"type": "notification"}) == 0


@pytest.mark.anyio
async def test_push_reaches_every_device_of_the_user(channel):
    phone, laptop, other = FakeSocket(), FakeSocket(), FakeSocket()
    await channel.handshake(phone, "alice-token")
    await channel.handshake(laptop, "alice-token")
    await channel.handshake(other, "bob-token")

    delivered = await channel.push_to_user(1, {"type": "notification", "data": {}})

    assert delivered == 2
    assert phone.sent == laptop.sent == [{"type": "notification", "data": {}}]
    assert other.sent == []


@pytest.mark.anyio
async def test_disconnect_is_idempotent(channel):
    socket = FakeSocket()
    session = await channel.handshake(socket, "alice-token")

    await channel.disconnect(session)
    await channel.disconnect(session)

    assert session.state is ConnectionState.DISCONNECTED
    assert channel.session_count(1) == 0
    assert await channel.push_to_user(1, {"type": "notification"}) == 0


@pytest.mark.anyio
async def test_failed_send_prunes_the_session(channel):
    healthy, broken = FakeSocket(), FakeSocket(fail_on_send=True)
    await channel.handshake(healthy, "alice-token")
    broken_session = await channel.handshake(broken, "alice-token")

    delivered = await channel.push_to_user(1, {"type": "notification"})

    assert delivered == 1
    assert broken_session.state is ConnectionState.DISCONNECTED
    assert channel.session_count(1) == 1


@pytest.mark.anyio
async def test_concurrent_joins_are_all_registered(channel):
    sockets = [FakeSocket() for _ in range(20)]

    async with anyio.create_task_group() as group:
        for socket in sockets:
            group.start_soon(channel.handshake, socket, "bob-token")

    assert channel.session_count(2) == 20


@pytest.mark.anyio
async def test_publisher_wraps_payload_and_deduplicates(channel):
    socket = FakeSocket()
    await channel.handshake(socket, "alice-token")
    publisher = NotificationPublisher(channel)
    payload = build_notification_payload("mention", "You were mentioned", task_id=3, team_id=9)

    publisher.try_push([1, 1, None, 2], payload)
    await anyio.sleep(0.05)

    assert socket.sent == [
        {
            "type": "notification",
            "data": {"type": "mention", "message": "You were mentioned", "taskId": 3, "teamId": 9},
        }
    ]


def test_publisher_without_event_loop_drops_the_push():
    publisher = NotificationPublisher(RealtimeChannel(fake_authenticator))

    publisher.try_push([1], build_notification_payload("mention", "hi"))

    assert not publisher._pending
