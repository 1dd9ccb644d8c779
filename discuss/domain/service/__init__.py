"""Domain services."""

from .base import Service
from .thread_coordinator import (
    ADD_FAILED_MESSAGE,
    DELETE_FAILED_MESSAGE,
    PendingMutation,
    ThreadCoordinator,
)
from .tree_builder import (
    build_tree,
    collect_subtree_ids,
    count_nodes,
    flatten_tree,
    get_max_depth,
)

__all__ = [
    "ADD_FAILED_MESSAGE",
    "DELETE_FAILED_MESSAGE",
    "PendingMutation",
    "Service",
    "ThreadCoordinator",
    "build_tree",
    "collect_subtree_ids",
    "count_nodes",
    "flatten_tree",
    "get_max_depth",
]
