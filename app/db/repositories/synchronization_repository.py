from collections.abc import Sequence
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import DatabaseError

from app.db.decorator import repository
from app.db.entities.synchronization import Synchronization
from app.db.repositories.repository_base import RepositoryBase

logger = logging.getLogger(__name__)


@repository(Synchronization)
class SynchronizationRepository(RepositoryBase):
    def get(self, **kwargs: str | UUID | bool | None) -> Synchronization | None:
        conditions = {k: v for k, v in kwargs.items() if v is not None}
        stmt = select(Synchronization).filter_by(**conditions)
        return self.db_session.session.execute(stmt).scalars().first()

    def get_by_external_id(self, source_ref: str, external_id: str) -> Synchronization | None:
        stmt = select(Synchronization).where(
            Synchronization.source_ref == source_ref,
            Synchronization.external_id == external_id,
        )
        return self.db_session.session.execute(stmt).scalars().first()

    def get_by_local_id(self, source_ref: str, local_id: UUID) -> Synchronization | None:
        stmt = select(Synchronization).where(
            Synchronization.source_ref == source_ref,
            Synchronization.local_id == local_id,
        )
        return self.db_session.session.execute(stmt).scalars().first()

    def find(self, **conditions: Any) -> Sequence[Synchronization]:
        conditions = {k: v for k, v in conditions.items() if v is not None}
        filter_conditions = []
        if "source_ref" in conditions:
            filter_conditions.append(
                Synchronization.source_ref == conditions["source_ref"]
            )

        if "schema_ref" in conditions:
            filter_conditions.append(
                Synchronization.schema_ref == conditions["schema_ref"]
            )

        if "local_id" in conditions:
            filter_conditions.append(
                Synchronization.local_id == UUID(str(conditions["local_id"]))
            )

        if "external_id" in conditions:
            filter_conditions.append(
                Synchronization.external_id == conditions["external_id"]
            )

        return (
            self.db_session.session.execute(
                select(Synchronization)
                .where(*filter_conditions)
                .order_by(Synchronization.created_at)
            )
            .scalars()
            .all()
        )

    def save(self, data: Synchronization) -> Synchronization:
        try:
            self.db_session.add(data)
            self.db_session.commit()
            return data
        except DatabaseError as e:
            self.db_session.rollback()
            logger.error(f"Failed to save synchronization {data.id}: {e}")
            raise
