from collections.abc import Sequence
import logging
from typing import Any
from uuid import UUID, uuid4

from fastapi.exceptions import HTTPException
from sqlalchemy.exc import DatabaseError

from app.db.db import Database
from app.db.entities.object_entity import ObjectEntity
from app.db.repositories.object_repository import ObjectRepository
from app.db.session import DbSession
from app.exceptions import PersistenceError
from app.models.object.dto import ObjectDto
from app.utils import deep_merge

logger = logging.getLogger(__name__)


def parse_object_id(object_id: str | UUID | None) -> UUID | None:
    if object_id is None or isinstance(object_id, UUID):
        return object_id
    try:
        return UUID(str(object_id))
    except ValueError:
        return None


class ObjectService:
    """
    Service to manage the objects (taken, betrokkenen, zaken) of the local object store.
    """

    def __init__(self, database: Database) -> None:
        self.__database = database

    def get_object(self, object_id: str | UUID | None) -> ObjectDto | None:
        parsed_id = parse_object_id(object_id)
        if parsed_id is None:
            return None

        try:
            with self.__database.get_db_session() as session:
                repository = session.get_repository(ObjectRepository)
                entity = repository.get(parsed_id)
                return entity.to_dto() if entity is not None else None
        except DatabaseError as e:
            raise PersistenceError(f"Could not read object {parsed_id}: {e}") from e

    def get_one(self, object_id: str | UUID) -> ObjectDto:
        dto = self.get_object(object_id)
        if dto is None:
            raise HTTPException(status_code=404, detail="Not Found")

        return dto

    def find(self, schema_ref: str | None = None) -> Sequence[ObjectDto]:
        with self.__database.get_db_session() as session:
            repository = session.get_repository(ObjectRepository)
            return [e.to_dto() for e in repository.find(schema_ref=schema_ref)]

    def create(self, schema_ref: str, data: dict[str, Any]) -> ObjectDto:
        with self.__database.get_db_session() as session:
            repository = session.get_repository(ObjectRepository)
            entity = repository.create(ObjectEntity(id=uuid4(), schema_ref=schema_ref, data=data))
            return entity.to_dto()

    def replace(self, object_id: str | UUID, data: dict[str, Any]) -> ObjectDto:
        """Overwrites all data of an existing object."""
        parsed_id = parse_object_id(object_id)
        with self.__database.get_db_session() as session:
            repository = session.get_repository(ObjectRepository)
            entity = repository.get(parsed_id) if parsed_id is not None else None
            if entity is None:
                raise HTTPException(status_code=404, detail="Not Found")

            entity.data = dict(data)
            return repository.update(entity).to_dto()

    def delete(self, object_id: str | UUID) -> None:
        parsed_id = parse_object_id(object_id)
        with self.__database.get_db_session() as session:
            repository = session.get_repository(ObjectRepository)
            entity = repository.get(parsed_id) if parsed_id is not None else None
            if entity is None:
                raise HTTPException(status_code=404, detail="Not Found")

            repository.delete(entity)

    def upsert_object(
        self,
        object_id: UUID,
        schema_ref: str,
        fields: dict[str, Any],
        session: DbSession | None = None,
    ) -> ObjectEntity:
        """
        Creates the object or merges `fields` into its current data. Fields not present in
        `fields` are kept. When a session is given the change is only added to it and the
        caller is responsible for committing.
        """
        if session is not None:
            return self.__upsert(session, object_id, schema_ref, fields)

        with self.__database.get_db_session() as own_session:
            entity = self.__upsert(own_session, object_id, schema_ref, fields)
            own_session.commit()
            return entity

    def set_value(self, object_id: str | UUID, key: str, value: Any) -> ObjectDto | None:
        parsed_id = parse_object_id(object_id)
        if parsed_id is None:
            return None

        try:
            with self.__database.get_db_session() as session:
                repository = session.get_repository(ObjectRepository)
                entity = repository.get(parsed_id)
                if entity is None:
                    return None

                entity.data = {**entity.data, key: value}
                return repository.update(entity).to_dto()
        except DatabaseError as e:
            raise PersistenceError(f"Could not update {key} of object {parsed_id}: {e}") from e

    def add_relation(self, object_id: str | UUID, key: str, related_id: str | UUID) -> ObjectDto | None:
        """
        Adds `related_id` to the list stored under `key` of the object, unless it is already there.
        Returns None when the object does not exist.
        """
        target = self.get_object(object_id)
        if target is None:
            return None

        current = target.data.get(key)
        relations = list(current) if isinstance(current, list) else []
        if str(related_id) in relations:
            return target

        relations.append(str(related_id))
        return self.set_value(target.id, key, relations)

    @staticmethod
    def __upsert(
        session: DbSession, object_id: UUID, schema_ref: str, fields: dict[str, Any]
    ) -> ObjectEntity:
        repository = session.get_repository(ObjectRepository)
        entity = repository.get(object_id)
        if entity is None:
            logger.debug(f"Creating object {object_id} of schema {schema_ref}")
            entity = ObjectEntity(id=object_id, schema_ref=schema_ref, data=deep_merge({}, fields))
        else:
            entity.data = deep_merge(entity.data, fields)

        session.add(entity)
        return entity
