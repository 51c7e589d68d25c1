"""Realtime notification helpers for the infrastructure layer."""

from .channel import (
    POLICY_VIOLATION,
    ConnectionState,
    LiveSession,
    LiveSocket,
    RealtimeChannel,
)
from .publisher import NOTIFICATION_EVENT, NotificationPublisher, build_notification_payload

__all__ = [
    "ConnectionState",
    "LiveSession",
    "LiveSocket",
    "NOTIFICATION_EVENT",
    "NotificationPublisher",
    "POLICY_VIOLATION",
    "RealtimeChannel",
    "build_notification_payload",
]
