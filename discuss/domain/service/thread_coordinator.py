"""Thread mutation coordinator.

Owns the flat comment collection of one thread and mediates every add and
delete through an optimistic-apply / confirm-or-rollback protocol against
the record store.

Each mutation call applies its optimistic change synchronously, before
anything is awaited, then hands the store round trip to a background task.
The task is the only suspension point; when it resumes it reconciles
records that are already identified by id, so no locking is needed.

Concurrent mutations each work from the collection as it was when they
were applied. A delete's closure is computed at delete time: a reply added
to the deleted subtree afterwards is not part of the closure and survives.
"""

import asyncio
import itertools
from collections import deque
from collections.abc import Awaitable, Callable, Coroutine, Generator
from dataclasses import dataclass
from typing import Any, TypeVar
from uuid import uuid4

import logfire

from discuss.config import ThreadSettings
from discuss.domain.error import (
    NotFoundError,
    PendingCommentError,
    StoreTimeoutError,
    ValidationError,
)
from discuss.domain.model import (
    Comment,
    CommentDraft,
    CommentNode,
    MutationOutcome,
    Notification,
    ThreadStats,
)
from discuss.domain.model.comment import utcnow
from discuss.domain.repository import CommentStore
from discuss.domain.service.tree_builder import (
    build_tree,
    collect_subtree_ids,
    count_nodes,
    get_max_depth,
)
from discuss.domain.value import CommentId, MutationKind, MutationStatus

from .base import Service

ADD_FAILED_MESSAGE = "Failed to post comment. Please try again."
DELETE_FAILED_MESSAGE = "Failed to delete comment. Please try again."

CommentsListener = Callable[[tuple[Comment, ...]], None]
NotificationListener = Callable[[Notification], None]

T = TypeVar("T")


@dataclass(frozen=True)
class PendingMutation:
    """Handle for a mutation whose optimistic change is already visible.

    ``affected`` holds the optimistic comment of an add, or the comments
    removed by a delete. Awaiting the handle waits for the store round trip
    and returns the outcome; callers that do not care may drop it.
    """

    kind: MutationKind
    target_id: CommentId
    affected: tuple[Comment, ...]
    task: "asyncio.Task[MutationOutcome]"

    def __await__(self) -> Generator[Any, None, MutationOutcome]:
        return self.task.__await__()


class ThreadCoordinator(Service):
    """Single owner of a thread's flat comment collection."""

    def __init__(
        self, store: CommentStore, settings: ThreadSettings | None = None
    ) -> None:
        """Initialize the coordinator.

        Args:
            store: Record store confirming mutations
            settings: Timeout, temporary id and notification settings
        """
        self.store = store
        self.settings = settings or ThreadSettings()
        self._comments: list[Comment] = []
        self._loaded = False
        self._sequence = itertools.count(1)
        self._in_flight: set[asyncio.Task[MutationOutcome]] = set()
        # Ids currently hidden by deletes the store has not answered yet
        self._pending_deletes: set[CommentId] = set()
        # Adds that resolved while their optimistic record was hidden by a
        # pending delete: temporary id -> confirmed comment (None if failed)
        self._detached_adds: dict[CommentId, Comment | None] = {}
        self._notifications: deque[Notification] = deque(
            maxlen=self.settings.notification_backlog
        )
        self._listeners: list[CommentsListener] = []
        self._notification_listeners: list[NotificationListener] = []

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @property
    def comments(self) -> tuple[Comment, ...]:
        """Snapshot of the flat collection."""
        return tuple(self._comments)

    @property
    def is_loaded(self) -> bool:
        """Whether the collection has been fetched from the store."""
        return self._loaded

    @property
    def pending_count(self) -> int:
        """Number of mutations waiting for the store."""
        return len(self._in_flight)

    def tree(self) -> list[CommentNode]:
        """Build the forest for the current collection."""
        return build_tree(self._comments)

    def stats(self, forest: list[CommentNode] | None = None) -> ThreadStats:
        """Compute total comment count and maximum depth.

        Args:
            forest: Forest to measure (built from the collection if omitted)
        """
        if forest is None:
            forest = self.tree()
        return ThreadStats(total=count_nodes(forest), max_depth=get_max_depth(forest))

    async def load(self) -> None:
        """Replace the collection with the store's contents.

        Optimistic comments still waiting for confirmation are kept, and
        comments hidden by an unconfirmed delete stay hidden.

        Raises:
            StoreError: If the store cannot be listed
        """
        with logfire.span("thread_coordinator.load"):
            stored = await self._call_store("list", self.store.list())
            stored_ids = {comment.id for comment in stored}
            pending = [
                c for c in self._comments if c.optimistic and c.id not in stored_ids
            ]
            self._comments = [
                c for c in stored if c.id not in self._pending_deletes
            ] + pending
            self._loaded = True
            logfire.info(
                "Thread loaded", count=len(stored), pending_optimistic=len(pending)
            )
            self._changed()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def reply(
        self, parent_id: CommentId | None, content: str, author: str
    ) -> PendingMutation:
        """Add a comment optimistically and confirm it with the store.

        The optimistic comment is appended before this method returns.

        Args:
            parent_id: Comment replied to (None for a top-level comment)
            content: Comment text
            author: Author name

        Returns:
            Handle of the pending add

        Raises:
            ValidationError: If content or author is blank
        """
        loop = asyncio.get_running_loop()
        draft = self._make_draft(parent_id, content, author)

        optimistic = Comment(
            id=self._temporary_id(),
            parent_id=draft.parent_id,
            content=draft.content,
            author=draft.author,
            created_at=utcnow(),
            optimistic=True,
        )
        self._comments.append(optimistic)
        logfire.info(
            "Optimistic comment added",
            temp_id=optimistic.id,
            parent_id=draft.parent_id,
            author=draft.author,
        )
        # Store call is scheduled before listeners run
        task = self._spawn(loop, self._confirm_add(optimistic, draft))
        self._changed()

        return PendingMutation(
            kind=MutationKind.ADD,
            target_id=optimistic.id,
            affected=(optimistic,),
            task=task,
        )

    def post(self, content: str, author: str) -> PendingMutation:
        """Add a top-level comment."""
        return self.reply(None, content, author)

    def delete(self, comment_id: CommentId) -> PendingMutation:
        """Remove a comment and its descendants optimistically.

        The closure is computed and removed before this method returns;
        the store is asked to delete ``comment_id`` only, it cascades on
        its side.

        Args:
            comment_id: Comment to delete

        Returns:
            Handle of the pending delete

        Raises:
            NotFoundError: If the comment is not in the collection
            PendingCommentError: If the comment is not confirmed yet
        """
        loop = asyncio.get_running_loop()
        target = self._find(comment_id)
        if target is None:
            raise NotFoundError("Comment", str(comment_id))
        if target.optimistic:
            raise PendingCommentError(str(comment_id))

        closure_ids = collect_subtree_ids(self._comments, comment_id)
        snapshot = [
            (index, comment)
            for index, comment in enumerate(self._comments)
            if comment.id in closure_ids
        ]
        self._comments = [c for c in self._comments if c.id not in closure_ids]
        self._pending_deletes |= closure_ids
        logfire.info(
            "Optimistic delete applied",
            comment_id=comment_id,
            removed=len(snapshot),
        )
        task = self._spawn(loop, self._confirm_delete(comment_id, snapshot))
        self._changed()

        return PendingMutation(
            kind=MutationKind.DELETE,
            target_id=comment_id,
            affected=tuple(comment for _, comment in snapshot),
            task=task,
        )

    async def drain(self) -> None:
        """Wait until every in-flight mutation has been reconciled."""
        while self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def subscribe(self, listener: CommentsListener) -> Callable[[], None]:
        """Call ``listener`` with the flat collection after every change.

        Returns:
            Function removing the listener
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def on_notification(self, listener: NotificationListener) -> Callable[[], None]:
        """Call ``listener`` for every failure notification.

        Returns:
            Function removing the listener
        """
        self._notification_listeners.append(listener)
        return lambda: self._notification_listeners.remove(listener)

    def drain_notifications(self) -> list[Notification]:
        """Return undelivered notifications, oldest first, and clear them."""
        notifications = list(self._notifications)
        self._notifications.clear()
        return notifications

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    async def _confirm_add(
        self, optimistic: Comment, draft: CommentDraft
    ) -> MutationOutcome:
        with logfire.span(
            "thread_coordinator.confirm_add",
            temp_id=optimistic.id,
            parent_id=draft.parent_id,
        ):
            try:
                confirmed = await self._call_store("add", self.store.add(draft))
            except asyncio.CancelledError:
                self._resolve_add(optimistic.id, None)
                raise
            except Exception as e:
                self._resolve_add(optimistic.id, None)
                self._notify(MutationKind.ADD, optimistic.id, ADD_FAILED_MESSAGE, e)
                return MutationOutcome(
                    kind=MutationKind.ADD,
                    status=MutationStatus.ROLLED_BACK,
                    target_id=optimistic.id,
                    error=str(e),
                )

            self._resolve_add(optimistic.id, confirmed)
            logfire.info(
                "Comment confirmed", temp_id=optimistic.id, comment_id=confirmed.id
            )
            return MutationOutcome(
                kind=MutationKind.ADD,
                status=MutationStatus.CONFIRMED,
                target_id=optimistic.id,
                comment=confirmed,
            )

    async def _confirm_delete(
        self,
        comment_id: CommentId,
        snapshot: list[tuple[int, Comment]],
    ) -> MutationOutcome:
        closure_ids = {comment.id for _, comment in snapshot}
        with logfire.span(
            "thread_coordinator.confirm_delete",
            comment_id=comment_id,
            closure_size=len(closure_ids),
        ):
            try:
                await self._call_store("delete", self.store.delete(comment_id))
            except asyncio.CancelledError:
                self._restore(snapshot)
                raise
            except Exception as e:
                self._restore(snapshot)
                self._notify(MutationKind.DELETE, comment_id, DELETE_FAILED_MESSAGE, e)
                return MutationOutcome(
                    kind=MutationKind.DELETE,
                    status=MutationStatus.ROLLED_BACK,
                    target_id=comment_id,
                    error=str(e),
                )
            finally:
                self._pending_deletes -= closure_ids
                for removed_id in closure_ids:
                    self._detached_adds.pop(removed_id, None)

            logfire.info("Delete confirmed", comment_id=comment_id)
            return MutationOutcome(
                kind=MutationKind.DELETE,
                status=MutationStatus.CONFIRMED,
                target_id=comment_id,
            )

    def _resolve_add(self, temp_id: CommentId, confirmed: Comment | None) -> None:
        """Swap the optimistic comment for the confirmed one, or drop it."""
        index = self._index_of(temp_id)
        if index is None:
            # Hidden by a pending delete; its rollback decides what comes back
            if temp_id in self._pending_deletes:
                self._detached_adds[temp_id] = confirmed
            return

        if confirmed is None or self._find(confirmed.id) is not None:
            # Failed, or a reload already brought in the confirmed record
            del self._comments[index]
        else:
            self._comments[index] = confirmed
        self._changed()

    def _restore(self, snapshot: list[tuple[int, Comment]]) -> None:
        """Re-insert a delete closure at its original positions."""
        present = {comment.id for comment in self._comments}
        for index, comment in snapshot:
            if comment.id in self._detached_adds:
                resolved = self._detached_adds[comment.id]
                if resolved is None:
                    continue
                comment = resolved
            if comment.id in present:
                continue
            self._comments.insert(min(index, len(self._comments)), comment)
            present.add(comment.id)
        logfire.info("Delete rolled back", restored=len(snapshot))
        self._changed()

    async def _call_store(self, operation: str, call: Awaitable[T]) -> T:
        timeout = self.settings.store_timeout_seconds
        if timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout)
        except asyncio.TimeoutError as e:
            raise StoreTimeoutError(operation, timeout) from e

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _make_draft(
        self, parent_id: CommentId | None, content: str, author: str
    ) -> CommentDraft:
        content = (content or "").strip()
        author = (author or "").strip()
        if not content:
            raise ValidationError("Comment content must not be empty")
        if not author:
            raise ValidationError("Comment author must not be empty")
        return CommentDraft(parent_id=parent_id or None, content=content, author=author)

    def _temporary_id(self) -> CommentId:
        return CommentId(
            f"{self.settings.temp_id_prefix}{next(self._sequence)}_{uuid4().hex}"
        )

    def _index_of(self, comment_id: CommentId) -> int | None:
        for index, comment in enumerate(self._comments):
            if comment.id == comment_id:
                return index
        return None

    def _find(self, comment_id: CommentId) -> Comment | None:
        index = self._index_of(comment_id)
        return None if index is None else self._comments[index]

    def _spawn(
        self,
        loop: asyncio.AbstractEventLoop,
        coro: Coroutine[Any, Any, MutationOutcome],
    ) -> "asyncio.Task[MutationOutcome]":
        task = loop.create_task(coro)
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    def _notify(
        self,
        operation: MutationKind,
        comment_id: CommentId,
        message: str,
        error: BaseException,
    ) -> None:
        notification = Notification(
            message=message, operation=operation, comment_id=comment_id
        )
        self._notifications.append(notification)
        logfire.warn(
            "Mutation rolled back",
            operation=operation.value,
            comment_id=comment_id,
            error=str(error),
            error_type=type(error).__name__,
        )
        for listener in list(self._notification_listeners):
            listener(notification)

    def _changed(self) -> None:
        snapshot = tuple(self._comments)
        for listener in list(self._listeners):
            listener(snapshot)
