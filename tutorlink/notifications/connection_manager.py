"""Live notification connections (server-sent events).

Each user holds at most one open stream. Frames are written as
`data: <json>\\n\\n`. A stream that fails on write is dropped from the
registry; other recipients are unaffected.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterator
from datetime import datetime, timezone
from typing import Protocol

from loguru import logger
from pydantic import BaseModel, Field

KEEPALIVE_FRAME = ": keep-alive\n\n"


class NotificationMessage(BaseModel):
    notification_id: str | None = None
    title: str
    message: str
    notification_type: str = "general"
    contract_id: str | None = None
    is_read: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationStream(Protocol):
    def write(self, frame: str) -> None: ...

    def close(self) -> None: ...


def format_sse_frame(notification: NotificationMessage) -> str:
    return f"data: {notification.model_dump_json()}\n\n"


class QueueStream:
    """In-process stream drained by the SSE endpoint."""

    _CLOSED = object()

    def __init__(self, maxsize: int = 0):
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, frame: str) -> None:
        if self._closed:
            raise ValueError("write to closed stream")
        try:
            self._queue.put_nowait(frame)
        except queue.Full as e:
            raise BufferError("notification stream buffer is full") from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # On a full buffer the oldest frame is dropped to make room for the end marker
        while True:
            try:
                self._queue.put_nowait(self._CLOSED)
                return
            except queue.Full:
                try:
                    self._queue.get_nowait()
                except queue.Empty:
                    continue

    def frames(self, keepalive_seconds: float | None = None) -> Iterator[str]:
        """Yield frames until the stream is closed.

        Args:
            keepalive_seconds: Emit a comment frame after this much idle time
                (None blocks indefinitely)
        """
        while True:
            try:
                item = self._queue.get(timeout=keepalive_seconds)
            except queue.Empty:
                yield KEEPALIVE_FRAME
                continue
            if item is self._CLOSED:
                return
            yield item


class ConnectionManager:
    """Thread-safe registry of user id -> notification stream."""

    def __init__(self):
        self._connections: dict[str, NotificationStream] = {}
        self._lock = threading.Lock()

    def register(self, user_id: str, stream: NotificationStream) -> None:
        """Register a stream, closing any stream the user already had."""
        with self._lock:
            previous = self._connections.get(user_id)
            self._connections[user_id] = stream
        if previous is not None and previous is not stream:
            previous.close()
            logger.debug(f"Replaced notification stream for user {user_id}")
        logger.info(f"Notification stream registered for user {user_id}")

    def unregister(self, user_id: str, stream: NotificationStream | None = None) -> None:
        """Remove and close the user's stream.

        When stream is given, only that exact stream is removed, so a stale
        handler cannot drop a newer registration.
        """
        with self._lock:
            current = self._connections.get(user_id)
            if current is None or (stream is not None and current is not stream):
                return
            del self._connections[user_id]
        current.close()
        logger.info(f"Notification stream unregistered for user {user_id}")

    def send(self, user_id: str, notification: NotificationMessage) -> bool:
        """Write one notification to the user's stream.

        Returns:
            True if written, False if the user is not connected or the write
            failed (the failing stream is unregistered)
        """
        with self._lock:
            stream = self._connections.get(user_id)
        if stream is None:
            return False

        try:
            stream.write(format_sse_frame(notification))
        except Exception as e:
            logger.warning(f"Notification write failed for user {user_id}: {e}")
            self.unregister(user_id, stream)
            return False
        return True

    def broadcast(self, user_ids: list[str], notification: NotificationMessage) -> list[str]:
        """Send to several users.

        Returns:
            Ids of connected users whose write failed; only those are removed
        """
        failed = []
        frame = format_sse_frame(notification)
        for user_id in user_ids:
            with self._lock:
                stream = self._connections.get(user_id)
            if stream is None:
                continue
            try:
                stream.write(frame)
            except Exception as e:
                logger.warning(f"Broadcast write failed for user {user_id}: {e}")
                self.unregister(user_id, stream)
                failed.append(user_id)

        if failed:
            logger.info(f"Broadcast to {len(user_ids)} users, {len(failed)} failed")
        return failed

    def is_connected(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._connections

    def active_connection_count(self) -> int:
        with self._lock:
            return len(self._connections)

    def connected_users(self) -> list[str]:
        with self._lock:
            return list(self._connections)


connection_manager = ConnectionManager()
