"""Survey and survey response tables using SQLAlchemy Core."""

from uuid import uuid4

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, Table, Text, Uuid

from app.models.base import metadata, utcnow

surveys = Table(
    "surveys",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column("title", String(300), nullable=False),
    Column("description", Text),
    # [{"text": str, "required": bool}, ...]
    Column("questions", JSON, nullable=False, default=list),
    Column("active", Boolean, nullable=False, default=True, index=True),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
    Column("updated_at", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow),
)

survey_responses = Table(
    "survey_responses",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column(
        "survey_id",
        Uuid,
        ForeignKey("surveys.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    # Answers by question index
    Column("answers", JSON, nullable=False, default=list),
    Column("meta", JSON),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
)
