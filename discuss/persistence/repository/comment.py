"""SQL implementation of the comment store."""

from typing import List
from uuid import uuid4

import logfire
from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from discuss.domain.error import StoreUnavailableError
from discuss.domain.model import Comment, CommentDraft
from discuss.domain.model.comment import utcnow
from discuss.domain.repository import CommentStore
from discuss.domain.value import CommentId
from discuss.persistence.mappers import comment_to_dict, row_to_comment
from discuss.persistence.sample import sample_comments
from discuss.persistence.tables import comments_table


class SqlCommentStore(CommentStore):
    """Durable CommentStore backed by SQLAlchemy.

    Each call runs in its own session and transaction, so the store can be
    shared by long-lived coordinators across requests.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        seed_sample_data: bool = False,
    ) -> None:
        """Initialize store with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
            seed_sample_data: Seed the sample thread if the table is empty
                on the first list(), add() or delete() call
        """
        self.session_factory = session_factory
        self._seed_pending = seed_sample_data

    async def list(self) -> List[Comment]:
        """Return every comment in insertion order."""
        try:
            async with self.session_factory() as session, session.begin():
                if self._seed_pending:
                    await self._seed_if_empty(session)
                stmt = select(comments_table).order_by(comments_table.c.position)
                result = await session.execute(stmt)
                return [row_to_comment(row._asdict()) for row in result.fetchall()]
        except SQLAlchemyError as e:
            logfire.error("Comment store list failed", error=str(e))
            raise StoreUnavailableError("list", str(e)) from e

    async def add(self, draft: CommentDraft) -> Comment:
        """Insert a comment with a fresh id and timestamp."""
        comment = Comment(
            id=CommentId(str(uuid4())),
            parent_id=draft.parent_id,
            content=draft.content,
            author=draft.author,
            created_at=utcnow(),
        )
        try:
            async with self.session_factory() as session, session.begin():
                if self._seed_pending:
                    await self._seed_if_empty(session)
                await session.execute(
                    insert(comments_table).values(**comment_to_dict(comment))
                )
        except SQLAlchemyError as e:
            logfire.error("Comment store add failed", error=str(e))
            raise StoreUnavailableError("add", str(e)) from e
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment and its descendants in one transaction."""
        try:
            async with self.session_factory() as session, session.begin():
                if self._seed_pending:
                    await self._seed_if_empty(session)
                doomed = await self._find_subtree(session, comment_id)
                if doomed:
                    await session.execute(
                        delete(comments_table).where(comments_table.c.id.in_(doomed))
                    )
                logfire.info(
                    "Comment subtree deleted", comment_id=comment_id, count=len(doomed)
                )
        except SQLAlchemyError as e:
            logfire.error("Comment store delete failed", error=str(e))
            raise StoreUnavailableError("delete", str(e)) from e

    async def clear(self) -> None:
        """Delete every comment (without re-seeding)."""
        self._seed_pending = False
        try:
            async with self.session_factory() as session, session.begin():
                await session.execute(delete(comments_table))
        except SQLAlchemyError as e:
            raise StoreUnavailableError("clear", str(e)) from e

    async def _find_subtree(
        self, session: AsyncSession, comment_id: CommentId
    ) -> List[str]:
        """Breadth-first lookup of a comment and its descendants."""
        exists = await session.execute(
            select(comments_table.c.id).where(comments_table.c.id == comment_id)
        )
        if exists.scalar_one_or_none() is None:
            return []

        found = [str(comment_id)]
        seen = set(found)
        frontier = list(found)
        while frontier:
            result = await session.execute(
                select(comments_table.c.id).where(
                    comments_table.c.parent_id.in_(frontier)
                )
            )
            frontier = [child for child in result.scalars() if child not in seen]
            seen.update(frontier)
            found.extend(frontier)
        return found

    async def _seed_if_empty(self, session: AsyncSession) -> None:
        self._seed_pending = False
        count = await session.scalar(select(func.count()).select_from(comments_table))
        if count:
            return
        seed = sample_comments()
        await session.execute(
            insert(comments_table), [comment_to_dict(comment) for comment in seed]
        )
        logfire.info("Store seeded with sample thread", count=len(seed))
