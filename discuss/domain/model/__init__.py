"""Domain model entities for discussion threads."""

from discuss.domain.model.comment import Comment, CommentDraft, CommentNode
from discuss.domain.model.thread import MutationOutcome, Notification, ThreadStats

__all__ = [
    "Comment",
    "CommentDraft",
    "CommentNode",
    "MutationOutcome",
    "Notification",
    "ThreadStats",
]
