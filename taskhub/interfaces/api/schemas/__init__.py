from .base import CamelModel
from .group import (
    GroupCreate,
    GroupDeleteResult,
    GroupDetailRead,
    GroupInitializeResult,
    GroupPageRead,
    GroupRead,
    GroupRename,
    GroupRenameResult,
    GroupReorder,
    GroupSummaryRead,
    GroupUpdate,
    TaskRead,
)
from .message import (
    BroadcastCreate,
    BroadcastRecipient,
    BroadcastResult,
    MessageBatchDelete,
    MessagePageRead,
    MessagePurgeResult,
    MessageRead,
    MessageReadState,
    UnreadCountRead,
)

__all__ = [
    "BroadcastCreate",
    "BroadcastRecipient",
    "BroadcastResult",
    "CamelModel",
    "GroupCreate",
    "GroupDeleteResult",
    "GroupDetailRead",
    "GroupInitializeResult",
    "GroupPageRead",
    "GroupRead",
    "GroupRename",
    "GroupRenameResult",
    "GroupReorder",
    "GroupSummaryRead",
    "GroupUpdate",
    "MessageBatchDelete",
    "MessagePageRead",
    "MessagePurgeResult",
    "MessageRead",
    "MessageReadState",
    "TaskRead",
    "UnreadCountRead",
]
