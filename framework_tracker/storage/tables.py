"""Relational schema for collected posts and issues."""

from sqlalchemy import BigInteger, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class StackOverflowPostRow(Base):
    """One row per collected question, per collection run."""

    __tablename__ = "stackoverflow_posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Not unique: every run inserts fresh rows.
    question_id = Column(Integer, index=True, nullable=False)
    title = Column(Text, nullable=False)
    body = Column(Text, nullable=False, default="")
    answers = Column(Text, nullable=False, default="")
    framework = Column(String(100), index=True)
    collected_at = Column(DateTime(timezone=True), nullable=False)


class GitHubIssueRow(Base):
    """Latest known state of a GitHub issue, keyed by its global id."""

    __tablename__ = "github_issues"

    id = Column(BigInteger, primary_key=True, autoincrement=False)
    title = Column(Text, nullable=False)
    body = Column(Text)
    framework = Column(String(100), index=True)
    first_seen_at = Column(DateTime(timezone=True), nullable=False)
    last_seen_at = Column(DateTime(timezone=True), nullable=False)
