"""Thread routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from discuss.application.usecase.thread import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    ExportThreadResponse,
    ExportThreadUseCase,
    GetNotificationsResponse,
    GetNotificationsUseCase,
    GetThreadResponse,
    GetThreadUseCase,
    ReplyRequest,
    ReplyResponse,
    ReplyUseCase,
)
from discuss.domain.error import (
    NotFoundError,
    PendingCommentError,
    StoreError,
    ValidationError,
)

router = APIRouter(prefix="/thread", tags=["thread"], route_class=DishkaRoute)


def _load_failed(e: StoreError) -> HTTPException:
    logfire.error("Failed to load comments", error=str(e))
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Failed to load comments",
    )


@router.get("", response_model=GetThreadResponse)
async def get_thread(
    get_thread_use_case: FromDishka[GetThreadUseCase],
) -> GetThreadResponse:
    """Get the comment forest with statistics.

    Pending replies are included (``optimistic: true``) and pending
    deletes are already removed.
    """
    try:
        return await get_thread_use_case.execute()
    except StoreError as e:
        raise _load_failed(e)


@router.get("/export", response_model=ExportThreadResponse)
async def export_thread(
    export_thread_use_case: FromDishka[ExportThreadUseCase],
) -> ExportThreadResponse:
    """Get the thread as a flat list in display (pre-order) order."""
    try:
        return await export_thread_use_case.execute()
    except StoreError as e:
        raise _load_failed(e)


class ReplyAPIRequest(BaseModel):
    """API request for posting a comment or a reply."""

    parent_id: str | None = None  # Parent comment ID for replies
    content: str = Field(min_length=1, max_length=10000)
    author: str = Field(min_length=1, max_length=255)


@router.post(
    "/comments",
    response_model=ReplyResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def reply(
    request: ReplyAPIRequest,
    reply_use_case: FromDishka[ReplyUseCase],
) -> ReplyResponse:
    """Post a comment or reply.

    Returns immediately with the optimistic comment. Its confirmation (or
    rollback) shows up in later reads of the thread and notifications.
    """
    try:
        return await reply_use_case.execute(
            ReplyRequest(
                parent_id=request.parent_id,
                content=request.content,
                author=request.author,
            )
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except StoreError as e:
        raise _load_failed(e)


@router.delete(
    "/comments/{comment_id}",
    response_model=DeleteCommentResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
) -> DeleteCommentResponse:
    """Delete a comment and all of its replies.

    Returns immediately with the removed ids; they come back if the store
    rejects the deletion.
    """
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id)
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except PendingCommentError as e:
        logfire.warn("Delete of unconfirmed comment rejected", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except StoreError as e:
        raise _load_failed(e)


@router.get("/notifications", response_model=GetNotificationsResponse)
async def get_notifications(
    get_notifications_use_case: FromDishka[GetNotificationsUseCase],
) -> GetNotificationsResponse:
    """Deliver failure notifications raised since the last call."""
    return await get_notifications_use_case.execute()
