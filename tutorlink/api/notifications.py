"""Server-sent notification stream."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from loguru import logger

from tutorlink.api.dependencies import get_current_user_id
from tutorlink.notifications.connection_manager import NotificationMessage, QueueStream, connection_manager

router = APIRouter(prefix="/notifications", tags=["notifications"])

KEEPALIVE_SECONDS = 15.0


def _drain(user_id: str, stream: QueueStream) -> Iterator[str]:
    try:
        yield from stream.frames(keepalive_seconds=KEEPALIVE_SECONDS)
    finally:
        connection_manager.unregister(user_id, stream)
        logger.debug(f"Notification stream closed for user {user_id}")


@router.get("/stream")
def stream_notifications(user_id: str = Depends(get_current_user_id)) -> StreamingResponse:
    stream = QueueStream()
    connection_manager.register(user_id, stream)
    return StreamingResponse(
        _drain(user_id, stream),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.post("/{user_id}")
def push_notification(
    user_id: str,
    notification: NotificationMessage,
    _sender_id: str = Depends(get_current_user_id),
) -> dict[str, bool]:
    """Deliver a notification to a connected user."""
    return {"delivered": connection_manager.send(user_id, notification)}
