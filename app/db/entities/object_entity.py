from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, String, TIMESTAMP, PrimaryKeyConstraint, types
from sqlalchemy.orm import Mapped, mapped_column

from app.db.entities.base import Base
from app.models.object.dto import ObjectDto


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ObjectEntity(Base):
    __tablename__ = "objects"
    __table_args__ = (PrimaryKeyConstraint("id"),)

    id: Mapped[UUID] = mapped_column(
        "id",
        types.Uuid,
        nullable=False,
        default=uuid4,
    )
    schema_ref: Mapped[str] = mapped_column("schema_ref", String, nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(
        "data", JSON, nullable=False, default=dict
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

    def to_dto(self) -> ObjectDto:
        return ObjectDto(
            id=self.id,
            schema_ref=self.schema_ref,
            data=dict(self.data),
            created_at=self.created_at,
            modified_at=self.modified_at,
        )
