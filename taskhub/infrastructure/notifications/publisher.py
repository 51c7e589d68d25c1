"""Best-effort delivery of notification frames to live sessions."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Iterable

from anyio import from_thread

from .channel import RealtimeChannel

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"


def build_notification_payload(
    event_type: str,
    message: str,
    *,
    task_id: int | None = None,
    team_id: int | None = None,
) -> dict[str, Any]:
    """Return the ``notification`` payload ``{type, message, taskId?, teamId?}``."""

    payload: dict[str, Any] = {"type": event_type, "message": message}
    if task_id is not None:
        payload["taskId"] = task_id
    if team_id is not None:
        payload["teamId"] = team_id
    return payload


class NotificationPublisher:
    """Schedule pushes on the channel without waiting for or retrying them."""

    def __init__(self, channel: RealtimeChannel) -> None:
        self._channel = channel
        self._pending: set[asyncio.Task] = set()

    def try_push(self, user_ids: Iterable[int | None], payload: dict[str, Any]) -> None:
        """Push ``payload`` once to each distinct user in ``user_ids``."""

        seen: set[int] = set()
        for user_id in user_ids:
            if not user_id or user_id in seen:
                continue
            seen.add(user_id)
            message = {"type": NOTIFICATION_EVENT, "data": copy.deepcopy(payload)}
            self._schedule_send(user_id, message)

    def _schedule_send(self, user_id: int, message: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Sync endpoints run in an AnyIO worker thread.
            try:
                from_thread.run(self._channel.push_to_user, user_id, message)
            except RuntimeError:
                logger.debug("No event loop reachable; push to user %s dropped", user_id)
        else:
            task = loop.create_task(self._channel.push_to_user(user_id, message))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)


__all__ = ["NOTIFICATION_EVENT", "NotificationPublisher", "build_notification_payload"]
