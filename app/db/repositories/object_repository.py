from collections.abc import Sequence
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import DatabaseError

from app.db.decorator import repository
from app.db.entities.object_entity import ObjectEntity
from app.db.repositories.repository_base import RepositoryBase

logger = logging.getLogger(__name__)


@repository(ObjectEntity)
class ObjectRepository(RepositoryBase):
    def get(self, object_id: UUID) -> ObjectEntity | None:
        return self.db_session.session.get(ObjectEntity, object_id)

    def find(self, schema_ref: str | None = None) -> Sequence[ObjectEntity]:
        stmt = select(ObjectEntity)
        if schema_ref is not None:
            stmt = stmt.where(ObjectEntity.schema_ref == schema_ref)
        return self.db_session.session.execute(stmt.order_by(ObjectEntity.created_at)).scalars().all()

    def create(self, data: ObjectEntity) -> ObjectEntity:
        try:
            self.db_session.add(data)
            self.db_session.commit()
            return data
        except DatabaseError as e:
            self.db_session.rollback()
            logger.error(f"Failed to add object {data.id}: {e}")
            raise

    def update(self, data: ObjectEntity) -> ObjectEntity:
        try:
            self.db_session.add(data)
            self.db_session.commit()
            self.db_session.session.refresh(data)
            return data
        except DatabaseError as e:
            self.db_session.rollback()
            logger.error(f"Failed to update object {data.id}: {e}")
            raise

    def delete(self, data: ObjectEntity) -> None:
        try:
            self.db_session.delete(data)
            self.db_session.commit()
        except DatabaseError as e:
            self.db_session.rollback()
            logger.error(f"Failed to delete object {data.id}: {e}")
            raise
