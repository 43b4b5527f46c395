"""Live notification delivery over server-sent events."""

from tutorlink.notifications.connection_manager import (
    ConnectionManager,
    NotificationMessage,
    QueueStream,
    connection_manager,
    format_sse_frame,
)

__all__ = [
    "ConnectionManager",
    "NotificationMessage",
    "QueueStream",
    "connection_manager",
    "format_sse_frame",
]
