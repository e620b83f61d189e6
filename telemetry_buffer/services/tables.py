"""SQLAlchemy table definitions for durable preferences."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, MetaData, Table, Text, func

metadata = MetaData()

preferences = Table(
    "preferences",
    metadata,
    Column("name", Text, primary_key=True),
    Column("value", Integer, nullable=False),
    Column(
        "updated_at",
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    ),
)
