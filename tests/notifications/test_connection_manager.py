"""Tests for the live notification connection registry."""

import json
import threading
from unittest.mock import MagicMock

import pytest

from tutorlink.notifications.connection_manager import ConnectionManager, NotificationMessage, QueueStream


@pytest.fixture
def manager() -> ConnectionManager:
    return ConnectionManager()


@pytest.fixture
def notification() -> NotificationMessage:
    return NotificationMessage(title="Session reminder", message="Lesson starts at 16:00")


def _failing_stream():
    stream = MagicMock()
    stream.write.side_effect = OSError("connection reset")
    return stream


def test_send_writes_sse_frame(manager, notification):
    stream = QueueStream()
    manager.register("user-1", stream)

    assert manager.send("user-1", notification) is True

    stream.close()
    frames = list(stream.frames())
    assert len(frames) == 1
    assert frames[0].startswith("data: ")
    assert frames[0].endswith("\n\n")
    payload = json.loads(frames[0][len("data: ") :])
    assert payload["title"] == "Session reminder"


def test_send_to_unknown_user(manager, notification):
    assert manager.send("nobody", notification) is False
    assert manager.active_connection_count() == 0


def test_register_replaces_and_closes_previous(manager):
    first, second = QueueStream(), QueueStream()

    manager.register("user-1", first)
    manager.register("user-1", second)

    assert manager.active_connection_count() == 1
    assert first.closed
    assert not second.closed


def test_unregister_closes_stream(manager):
    stream = QueueStream()
    manager.register("user-1", stream)

    manager.unregister("user-1")

    assert stream.closed
    assert not manager.is_connected("user-1")
    manager.unregister("user-1")  # no-op


def test_stale_unregister_keeps_newer_stream(manager):
    old, new = QueueStream(), QueueStream()
    manager.register("user-1", old)
    manager.register("user-1", new)

    manager.unregister("user-1", old)

    assert manager.is_connected("user-1")
    assert not new.closed


def test_failing_send_unregisters(manager, notification):
    stream = _failing_stream()
    manager.register("user-1", stream)

    assert manager.send("user-1", notification) is False

    assert not manager.is_connected("user-1")
    stream.close.assert_called_once()


def test_broadcast_removes_only_failed(manager, notification):
    healthy = {user_id: QueueStream() for user_id in ("a", "c")}
    manager.register("a", healthy["a"])
    manager.register("b", _failing_stream())
    manager.register("c", healthy["c"])

    failed = manager.broadcast(["a", "b", "c", "offline"], notification)

    assert failed == ["b"]
    assert sorted(manager.connected_users()) == ["a", "c"]
    for stream in healthy.values():
        stream.close()
        assert len(list(stream.frames())) == 1


def test_closed_queue_stream_rejects_writes():
    stream = QueueStream()
    stream.close()
    with pytest.raises(ValueError):
        stream.write("data: {}\n\n")


def test_keepalive_frame_when_idle():
    stream = QueueStream()
    frames = stream.frames(keepalive_seconds=0.01)
    assert next(frames).startswith(":")


def test_concurrent_registration(manager):
    def register_many(offset):
        for i in range(50):
            manager.register(f"user-{offset + i}", QueueStream())

    threads = [threading.Thread(target=register_many, args=(n * 50,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert manager.active_connection_count() == 200


def test_full_buffer_unregisters_without_blocking(manager, notification):
    stream = QueueStream(maxsize=1)
    manager.register("user-1", stream)
    assert manager.send("user-1", notification) is True

    worker = threading.Thread(target=manager.send, args=("user-1", notification), daemon=True)
    worker.start()
    worker.join(timeout=2)

    assert not worker.is_alive()
    assert not manager.is_connected("user-1")
    assert stream.closed
    assert list(stream.frames(keepalive_seconds=0.01)) == []
