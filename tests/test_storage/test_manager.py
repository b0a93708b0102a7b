"""Tests for storage manager."""

from pathlib import Path
from unittest.mock import patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from framework_tracker.errors import StorageError
from framework_tracker.github_client.models import GitHubIssue
from framework_tracker.stackexchange.models import StackOverflowPost
from framework_tracker.storage.manager import StorageManager
from framework_tracker.storage.tables import GitHubIssueRow


class TestStorageManager:
    """Test StorageManager class."""

    @pytest.fixture
    def sample_post(self) -> StackOverflowPost:
        return StackOverflowPost(
            question_id=5, title="x", body="y", answers="", framework="Go"
        )

    @pytest.fixture
    def sample_issue(self) -> GitHubIssue:
        return GitHubIssue(id=1, title="t", body="b", framework="Go")

    def test_creates_sqlite_directory(self, tmp_path: Path) -> None:
        """A file database gets its parent directory created."""
        db_path = tmp_path / "nested" / "tracker.db"
        manager = StorageManager(f"sqlite:///{db_path}")
        manager.create_schema()

        assert db_path.parent.is_dir()
        assert db_path.exists()

    def test_create_schema_is_repeatable(self, storage: StorageManager) -> None:
        storage.create_schema()
        assert storage.count_qna_posts() == 0

    def test_store_qna_post(
        self, storage: StorageManager, sample_post: StackOverflowPost
    ) -> None:
        storage.store_qna_post(sample_post)

        posts = storage.list_qna_posts()
        assert len(posts) == 1
        assert posts[0].question_id == 5
        assert posts[0].title == "x"
        assert posts[0].body == "y"
        assert posts[0].framework == "Go"

    def test_store_qna_post_twice_duplicates(
        self, storage: StorageManager, sample_post: StackOverflowPost
    ) -> None:
        """Posts are insert-only: the same question stored twice is two rows."""
        storage.store_qna_post(sample_post)
        storage.store_qna_post(sample_post)

        assert storage.count_qna_posts(question_id=5) == 2
        assert storage.count_qna_posts() == 2

    def test_store_new_issue(
        self, storage: StorageManager, sample_issue: GitHubIssue
    ) -> None:
        created = storage.store_repo_issue(sample_issue)

        assert created is True
        assert storage.get_repo_issue(1) == sample_issue

    def test_store_same_issue_is_idempotent(
        self, storage: StorageManager, sample_issue: GitHubIssue
    ) -> None:
        assert storage.store_repo_issue(sample_issue) is True
        assert storage.store_repo_issue(sample_issue) is False

        issues = storage.list_repo_issues()
        assert issues == [sample_issue]

    def test_second_store_wins(
        self, storage: StorageManager, sample_issue: GitHubIssue
    ) -> None:
        storage.store_repo_issue(sample_issue)
        storage.store_repo_issue(GitHubIssue(id=1, title="t2", body="b2"))

        stored = storage.list_repo_issues()
        assert len(stored) == 1
        assert stored[0].title == "t2"
        assert stored[0].body == "b2"
        # An update without a framework keeps the one already recorded.
        assert stored[0].framework == "Go"

    def test_distinct_ids_do_not_collide(self, storage: StorageManager) -> None:
        storage.store_repo_issue(GitHubIssue(id=1, title="one"))
        storage.store_repo_issue(GitHubIssue(id=2, title="two"))

        assert [i.title for i in storage.list_repo_issues()] == ["one", "two"]

    def test_large_issue_ids(self, storage: StorageManager) -> None:
        """GitHub issue ids exceed 32 bits."""
        issue = GitHubIssue(id=3_141_592_653, title="big")
        storage.store_repo_issue(issue)

        assert storage.get_repo_issue(3_141_592_653) == issue

    def test_update_refreshes_last_seen(
        self, storage: StorageManager, sample_issue: GitHubIssue
    ) -> None:
        storage.store_repo_issue(sample_issue)
        storage.store_repo_issue(sample_issue)

        with storage.session_factory() as session:
            row = session.scalars(select(GitHubIssueRow)).one()
            assert row.last_seen_at >= row.first_seen_at

    def test_get_missing_issue(self, storage: StorageManager) -> None:
        assert storage.get_repo_issue(404) is None

    def test_get_storage_stats(
        self,
        storage: StorageManager,
        sample_post: StackOverflowPost,
        sample_issue: GitHubIssue,
    ) -> None:
        storage.store_qna_post(sample_post)
        storage.store_qna_post(sample_post)
        storage.store_qna_post(
            StackOverflowPost(question_id=6, title="d", framework="Docker")
        )
        storage.store_repo_issue(sample_issue)

        stats = storage.get_storage_stats()

        assert stats["total_posts"] == 3
        assert stats["distinct_questions"] == 2
        assert stats["total_issues"] == 1
        assert stats["frameworks"] == {
            "Go": {"posts": 2, "issues": 1},
            "Docker": {"posts": 1, "issues": 0},
        }
        assert stats["database"].startswith("sqlite")

    def test_lookup_failure_propagates(
        self, storage: StorageManager, sample_issue: GitHubIssue
    ) -> None:
        """A failing lookup is reported, never treated as an existing row."""
        error = OperationalError("SELECT", {}, Exception("database is locked"))
        with patch("sqlalchemy.orm.Session.get", side_effect=error):
            with pytest.raises(StorageError, match="Failed to store issue 1"):
                storage.store_repo_issue(sample_issue)

        assert storage.list_repo_issues() == []

    def test_insert_failure_propagates(
        self, sample_post: StackOverflowPost
    ) -> None:
        """Writing before the schema exists surfaces a StorageError."""
        manager = StorageManager("sqlite://")

        with pytest.raises(StorageError, match="Failed to store question 5"):
            manager.store_qna_post(sample_post)

    def test_read_failure_propagates(self) -> None:
        manager = StorageManager("sqlite://")

        with pytest.raises(StorageError, match="Failed to read from storage"):
            manager.count_qna_posts()
