"""Aggregate application use cases."""

from .groups import initialize_groups, list_group_tree
from .messages import MessageDispatcher, count_unread_messages, mark_message_read

__all__ = [
    "MessageDispatcher",
    "count_unread_messages",
    "initialize_groups",
    "list_group_tree",
    "mark_message_read",
]
