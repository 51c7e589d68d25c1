"""Use cases for managing personal and team grouping trees."""

from .browse_groups import GroupDetail, GroupPage, GroupSummary, browse_groups, get_group_detail
from .create_group import create_group
from .delete_group import delete_group
from .initialize_groups import DEFAULT_TREE, initialize_groups
from .list_group_tree import list_group_tree
from .move_group import KEEP_PARENT, move_group
from .rename_group_as_admin import GroupRenameResult, rename_group_as_admin
from .update_group import update_group
from .validators import ensure_team_member, resolve_team_group_owner

__all__ = [
    "DEFAULT_TREE",
    "GroupDetail",
    "GroupPage",
    "GroupRenameResult",
    "GroupSummary",
    "KEEP_PARENT",
    "browse_groups",
    "create_group",
    "delete_group",
    "ensure_team_member",
    "get_group_detail",
    "initialize_groups",
    "list_group_tree",
    "move_group",
    "rename_group_as_admin",
    "resolve_team_group_owner",
    "update_group",
]
