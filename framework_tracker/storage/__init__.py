"""Relational storage for collected records."""

from .manager import StorageManager
from .tables import Base, GitHubIssueRow, StackOverflowPostRow

__all__ = ["Base", "GitHubIssueRow", "StackOverflowPostRow", "StorageManager"]
