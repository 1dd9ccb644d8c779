"""SQLAlchemy table definitions for the durable comment store."""

from sqlalchemy import Column, DateTime, Index, Integer, MetaData, String, Table, Text

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    # Insertion order; list() returns comments in this order
    Column("position", Integer, primary_key=True, autoincrement=True),
    Column("id", String(64), nullable=False, unique=True),
    # No foreign key: orphaned replies are kept and shown as roots
    Column("parent_id", String(64), nullable=True),
    Column("content", Text, nullable=False),
    Column("author", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_comments_parent_id", comments_table.c.parent_id)
