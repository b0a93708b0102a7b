"""Storage manager for collected Stack Overflow posts and GitHub issues."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..errors import StorageError
from ..github_client.models import GitHubIssue
from ..stackexchange.models import StackOverflowPost
from .tables import Base, GitHubIssueRow, StackOverflowPostRow

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create an engine, preparing SQLite files and in-memory databases."""
    url = make_url(database_url)

    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    if url.database in (None, "", ":memory:"):
        # One shared connection so every thread sees the same database.
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, connect_args={"check_same_thread": False})


class StorageManager:
    """Persists collected records, one transaction per record."""

    def __init__(
        self,
        database_url: str = "sqlite:///data/framework_tracker.db",
        engine: Engine | None = None,
    ):
        """Initialize storage manager.

        Args:
            database_url: SQLAlchemy URL used when no engine is given
            engine: Pre-built engine to use instead of ``database_url``
        """
        self.engine = engine or build_engine(database_url)
        self.session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

    def create_schema(self) -> None:
        """Create missing tables from the ORM models."""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create schema: {e}") from e

    def store_qna_post(self, post: StackOverflowPost) -> None:
        """Insert a post unconditionally.

        Posts are never looked up first, so storing the same question twice
        produces two rows.
        """
        row = StackOverflowPostRow(
            question_id=post.question_id,
            title=post.title,
            body=post.body,
            answers=post.answers,
            framework=post.framework,
            collected_at=datetime.now(timezone.utc),
        )
        try:
            with self.session_factory.begin() as session:
                session.add(row)
        except SQLAlchemyError as e:
            raise StorageError(
                f"Failed to store question {post.question_id}: {e}"
            ) from e

    def store_repo_issue(self, issue: GitHubIssue) -> bool:
        """Insert an issue, or refresh the stored copy with the same id.

        Args:
            issue: Issue to persist

        Returns:
            True if a new row was created, False if an existing one was updated

        Raises:
            StorageError: If the lookup or the write fails
        """
        now = datetime.now(timezone.utc)
        try:
            with self.session_factory.begin() as session:
                existing = session.get(GitHubIssueRow, issue.id)
                if existing is None:
                    session.add(
                        GitHubIssueRow(
                            id=issue.id,
                            title=issue.title,
                            body=issue.body,
                            framework=issue.framework,
                            first_seen_at=now,
                            last_seen_at=now,
                        )
                    )
                    logger.debug("Inserted issue %s", issue.id)
                    return True

                existing.title = issue.title
                existing.body = issue.body
                if issue.framework is not None:
                    existing.framework = issue.framework
                existing.last_seen_at = now
                logger.debug("Updated issue %s", issue.id)
                return False
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to store issue {issue.id}: {e}") from e

    def count_qna_posts(self, question_id: int | None = None) -> int:
        """Count stored post rows, optionally for a single question."""
        stmt = select(func.count()).select_from(StackOverflowPostRow)
        if question_id is not None:
            stmt = stmt.where(StackOverflowPostRow.question_id == question_id)
        with self._session() as session:
            return session.scalar(stmt) or 0

    def list_qna_posts(self, question_id: int | None = None) -> list[StackOverflowPost]:
        """Load stored posts in insertion order."""
        stmt = select(StackOverflowPostRow).order_by(StackOverflowPostRow.id)
        if question_id is not None:
            stmt = stmt.where(StackOverflowPostRow.question_id == question_id)
        with self._session() as session:
            return [
                StackOverflowPost(
                    question_id=row.question_id,
                    title=row.title,
                    body=row.body,
                    answers=row.answers,
                    framework=row.framework,
                )
                for row in session.scalars(stmt)
            ]

    def get_repo_issue(self, issue_id: int) -> GitHubIssue | None:
        """Load a stored issue by id, or None if it was never seen."""
        with self._session() as session:
            row = session.get(GitHubIssueRow, issue_id)
            if row is None:
                return None
            return _issue_from_row(row)

    def list_repo_issues(self) -> list[GitHubIssue]:
        """Load all stored issues ordered by id."""
        with self._session() as session:
            rows = session.scalars(select(GitHubIssueRow).order_by(GitHubIssueRow.id))
            return [_issue_from_row(row) for row in rows]

    def get_storage_stats(self) -> dict[str, Any]:
        """Get statistics about stored records.

        Returns:
            Dictionary with storage statistics
        """
        with self._session() as session:
            total_posts = session.scalar(
                select(func.count()).select_from(StackOverflowPostRow)
            )
            distinct_questions = session.scalar(
                select(func.count(func.distinct(StackOverflowPostRow.question_id)))
            )
            total_issues = session.scalar(
                select(func.count()).select_from(GitHubIssueRow)
            )

            frameworks: dict[str, dict[str, int]] = {}
            for name, count in session.execute(
                select(StackOverflowPostRow.framework, func.count()).group_by(
                    StackOverflowPostRow.framework
                )
            ):
                key = name or "unknown"
                frameworks.setdefault(key, {"posts": 0, "issues": 0})["posts"] = count
            for name, count in session.execute(
                select(GitHubIssueRow.framework, func.count()).group_by(
                    GitHubIssueRow.framework
                )
            ):
                key = name or "unknown"
                frameworks.setdefault(key, {"posts": 0, "issues": 0})["issues"] = count

        return {
            "total_posts": total_posts or 0,
            "distinct_questions": distinct_questions or 0,
            "total_issues": total_issues or 0,
            "frameworks": frameworks,
            "database": self.engine.url.render_as_string(hide_password=True),
        }

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Read-only session whose database errors surface as StorageError."""
        session = self.session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read from storage: {e}") from e
        finally:
            session.close()


def _issue_from_row(row: GitHubIssueRow) -> GitHubIssue:
    return GitHubIssue(
        id=row.id, title=row.title, body=row.body, framework=row.framework
    )
