"""ORM models used by the application infrastructure."""

from .collaborators import TaskModel, TeamMemberModel, TeamModel, UserModel
from .group_node import GroupNodeModel, TeamGroupNodeModel
from .message import MessageModel

__all__ = [
    "GroupNodeModel",
    "MessageModel",
    "TaskModel",
    "TeamGroupNodeModel",
    "TeamMemberModel",
    "TeamModel",
    "UserModel",
]
