"""Thread use cases."""

from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .export_thread import ExportThreadResponse, ExportThreadUseCase
from .get_notifications import GetNotificationsResponse, GetNotificationsUseCase
from .get_thread import GetThreadResponse, GetThreadUseCase
from .reply import ReplyRequest, ReplyResponse, ReplyUseCase
from .responses import CommentNodeResponse, CommentResponse, ThreadStatsResponse

__all__ = [
    "CommentNodeResponse",
    "CommentResponse",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "ExportThreadResponse",
    "ExportThreadUseCase",
    "GetNotificationsResponse",
    "GetNotificationsUseCase",
    "GetThreadResponse",
    "GetThreadUseCase",
    "ReplyRequest",
    "ReplyResponse",
    "ReplyUseCase",
    "ThreadStatsResponse",
]
