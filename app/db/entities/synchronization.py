from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import (
    BOOLEAN,
    String,
    TIMESTAMP,
    PrimaryKeyConstraint,
    UniqueConstraint,
    types,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.db.entities.base import Base
from app.models.synchronization.dto import SynchronizationDto


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Synchronization(Base):
    """
    Link between one record in an external source and one object in the local object store.
    """

    __tablename__ = "synchronizations"
    __table_args__ = (
        PrimaryKeyConstraint("id"),
        UniqueConstraint("source_ref", "external_id"),
        UniqueConstraint("source_ref", "local_id"),
    )

    id: Mapped[UUID] = mapped_column(
        "id",
        types.Uuid,
        nullable=False,
        default=uuid4,
    )
    source_ref: Mapped[str] = mapped_column("source_ref", String, nullable=False)
    schema_ref: Mapped[str] = mapped_column("schema_ref", String, nullable=False)
    local_id: Mapped[UUID | None] = mapped_column(
        "local_id", types.Uuid, nullable=True, default=None
    )
    external_id: Mapped[str | None] = mapped_column(
        "external_id", String, nullable=True, default=None
    )
    endpoint: Mapped[str | None] = mapped_column(
        "endpoint", String, nullable=True, default=None
    )
    last_synced_at: Mapped[datetime | None] = mapped_column(
        "last_synced_at",
        TIMESTAMP(timezone=True),
        nullable=True,
        default=None,
    )
    is_removed: Mapped[bool] = mapped_column(
        "is_removed", BOOLEAN, nullable=False, default=False
    )
    removed_at: Mapped[datetime | None] = mapped_column(
        "removed_at",
        TIMESTAMP(timezone=True),
        nullable=True,
        default=None,
    )
    created_at: Mapped[datetime] = mapped_column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, default=_now
    )
    modified_at: Mapped[datetime] = mapped_column(
        "modified_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_now,
        onupdate=_now,
    )

    def to_dto(self) -> SynchronizationDto:
        return SynchronizationDto(
            id=self.id,
            source_ref=self.source_ref,
            schema_ref=self.schema_ref,
            local_id=self.local_id,
            external_id=self.external_id,
            endpoint=self.endpoint,
            last_synced_at=self.last_synced_at,
            is_removed=self.is_removed,
            removed_at=self.removed_at,
        )
