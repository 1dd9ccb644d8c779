"""Strongly typed identifiers for discussion entities.

Comment ids are opaque strings: the record store assigns durable ids,
the coordinator assigns temporary ids (prefixed) to optimistic comments.
"""

from typing import NewType

CommentId = NewType("CommentId", str)
