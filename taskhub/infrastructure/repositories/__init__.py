"""Repository implementations for infrastructure layer."""

from .collaborator_repository import TaskRepository, TeamRepository, UserRepository
from .group_repository import GroupRepository
from .message_repository import MessageRepository

__all__ = [
    "GroupRepository",
    "MessageRepository",
    "TaskRepository",
    "TeamRepository",
    "UserRepository",
]
