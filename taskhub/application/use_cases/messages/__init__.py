"""Use cases for recording, reading and purging team messages."""

from .admin_console import (
    MAX_PAGE_SIZE,
    MessagePage,
    browse_messages,
    get_message,
    set_message_read_state,
)
from .dispatcher import (
    BROADCAST_TARGETS,
    BroadcastResult,
    MessageDispatcher,
)
from .events import (
    isolate_dispatch_failure,
    notify_member_join_quietly,
    notify_member_leave_quietly,
    notify_mention_quietly,
    notify_permission_change_quietly,
    notify_role_change_quietly,
    notify_task_assigned_quietly,
    notify_team_deleted_quietly,
    record_audit_log_quietly,
)
from .purge import purge_message, purge_messages, purge_messages_older_than
from .read_state import (
    count_unread_messages,
    list_team_messages,
    list_user_messages,
    mark_message_read,
)

__all__ = [
    "BROADCAST_TARGETS",
    "BroadcastResult",
    "MAX_PAGE_SIZE",
    "MessageDispatcher",
    "MessagePage",
    "browse_messages",
    "count_unread_messages",
    "get_message",
    "isolate_dispatch_failure",
    "list_team_messages",
    "list_user_messages",
    "mark_message_read",
    "notify_member_join_quietly",
    "notify_member_leave_quietly",
    "notify_mention_quietly",
    "notify_permission_change_quietly",
    "notify_role_change_quietly",
    "notify_task_assigned_quietly",
    "notify_team_deleted_quietly",
    "purge_message",
    "purge_messages",
    "purge_messages_older_than",
    "record_audit_log_quietly",
    "set_message_read_state",
]
