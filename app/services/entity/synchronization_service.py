from collections.abc import Sequence
from datetime import datetime, timezone
import logging
from typing import Any, Callable
from uuid import UUID, uuid4

from sqlalchemy.exc import DatabaseError, IntegrityError

from app.db.db import Database
from app.db.entities.synchronization import Synchronization
from app.db.repositories.synchronization_repository import SynchronizationRepository
from app.db.session import DbSession
from app.exceptions import PersistenceError, SyncException
from app.models.gateway.dto import MappingDto, SchemaDto, SourceDto
from app.models.synchronization.dto import SynchronizationDto
from app.models.synchronization.lookup import LookupKey
from app.services.api.call_service import CallService
from app.services.entity.object_service import ObjectService, parse_object_id
from app.services.mapping.mapping_service import MappingService

logger = logging.getLogger(__name__)

# A duplicate insert from a concurrent run is resolved by one re-fetch
MAX_SAVE_ATTEMPTS = 2


class SynchronizationService:
    """
    Keeps the links between records of a source and objects in the local object store.

    This service is the only writer of synchronizations. Inbound, `reconcile` finds or creates
    the link of a source record, maps the record and merges it into the linked object. Outbound,
    `push` sends a mapped object to a source and `attach_external_id` / `mark_removed` record
    the outcome on the link.
    """

    def __init__(
        self,
        database: Database,
        object_service: ObjectService,
        mapping_service: MappingService,
        call_service: CallService,
    ) -> None:
        self.__database = database
        self.__object_service = object_service
        self.__mapping_service = mapping_service
        self.__call_service = call_service

    def reconcile(
        self,
        source: SourceDto,
        schema: SchemaDto,
        mapping: MappingDto,
        source_record: dict[str, Any],
        lookup_key: LookupKey,
        endpoint: str | None = None,
    ) -> SynchronizationDto:
        """
        Finds or creates the link for `source_record`, maps the record and merges the result into
        the linked object. The lookup, the object write and the link write share one transaction.
        """
        external_id = lookup_key.resolve(source_record)
        mapped = self.__mapping_service.mapping(mapping, source_record)
        self.__check_required(schema, mapped, external_id)

        def apply(session: DbSession, link: Synchronization | None) -> Synchronization:
            if link is None:
                logger.debug(f"Creating synchronization for {external_id} on {source.reference}")
                link = Synchronization(
                    id=uuid4(),
                    source_ref=source.reference,
                    schema_ref=schema.reference,
                    external_id=external_id,
                    local_id=uuid4(),
                )
            elif link.local_id is None:
                link.local_id = uuid4()

            self.__object_service.upsert_object(
                link.local_id,  # type: ignore[arg-type]
                schema.reference,
                mapped,
                session=session,
            )
            link.endpoint = endpoint or link.endpoint
            link.is_removed = False
            link.removed_at = None
            link.last_synced_at = datetime.now(timezone.utc)
            return link

        link = self.__save_with_refetch(
            lambda repository: repository.get_by_external_id(source.reference, external_id),
            apply,
            f"{source.reference}/{external_id}",
        )
        logger.info(f"Synchronized {external_id} from {source.reference} to object {link.local_id}")
        return link

    def get_by_object(self, source: SourceDto, object_id: str | UUID) -> SynchronizationDto | None:
        parsed_id = parse_object_id(object_id)
        if parsed_id is None:
            return None

        try:
            with self.__database.get_db_session() as session:
                repository = session.get_repository(SynchronizationRepository)
                link = repository.get_by_local_id(source.reference, parsed_id)
                return link.to_dto() if link is not None else None
        except DatabaseError as e:
            raise PersistenceError(f"Could not read synchronization of object {parsed_id}: {e}") from e

    def find(self, **params: Any) -> Sequence[SynchronizationDto]:
        with self.__database.get_db_session() as session:
            repository = session.get_repository(SynchronizationRepository)
            return [link.to_dto() for link in repository.find(**params)]

    def push(self, source: SourceDto, endpoint: str, body: dict[str, Any]) -> dict[str, Any]:
        """
        Sends a mapped object to the source with a single POST and returns the decoded reply.
        """
        response = self.__call_service.call(source=source, endpoint=endpoint, method="POST", body=body)
        return self.__call_service.decode_response(source=source, response=response)

    def attach_external_id(
        self,
        source: SourceDto,
        schema_ref: str,
        local_id: UUID,
        external_id: str,
        endpoint: str | None = None,
    ) -> SynchronizationDto:
        """
        Stores `external_id` on the link of the local object, creating the link if it does not exist.
        """

        def apply(session: DbSession, link: Synchronization | None) -> Synchronization:
            if link is None:
                link = Synchronization(
                    id=uuid4(),
                    source_ref=source.reference,
                    schema_ref=schema_ref,
                    local_id=local_id,
                )
            link.external_id = external_id
            link.endpoint = endpoint or link.endpoint
            link.is_removed = False
            link.removed_at = None
            link.last_synced_at = datetime.now(timezone.utc)
            return link

        return self.__save_with_refetch(
            lambda repository: repository.get_by_local_id(source.reference, local_id),
            apply,
            f"{source.reference}/{local_id}",
        )

    def mark_removed(self, link: SynchronizationDto) -> SynchronizationDto:
        try:
            with self.__database.get_db_session() as session:
                repository = session.get_repository(SynchronizationRepository)
                target = repository.get(id=link.id)
                if target is None:
                    raise SyncException(f"Synchronization {link.id} no longer exists")

                now = datetime.now(timezone.utc)
                target.is_removed = True
                target.removed_at = now
                target.last_synced_at = now
                return repository.save(target).to_dto()
        except DatabaseError as e:
            raise PersistenceError(f"Could not mark synchronization {link.id} as removed: {e}") from e

    def __save_with_refetch(
        self,
        lookup: Callable[[SynchronizationRepository], Synchronization | None],
        apply: Callable[[DbSession, Synchronization | None], Synchronization],
        description: str,
    ) -> SynchronizationDto:
        for attempt in range(MAX_SAVE_ATTEMPTS):
            try:
                with self.__database.get_db_session() as session:
                    repository = session.get_repository(SynchronizationRepository)
                    link = apply(session, lookup(repository))
                    return repository.save(link).to_dto()
            except IntegrityError:
                logger.warning(
                    f"Synchronization {description} was created concurrently, fetching it again (attempt {attempt})"
                )
            except DatabaseError as e:
                raise PersistenceError(f"Could not store synchronization {description}: {e}") from e

        raise SyncException(f"Could not store synchronization {description}")

    @staticmethod
    def __check_required(schema: SchemaDto, mapped: dict[str, Any], external_id: str) -> None:
        missing = [field for field in schema.required if mapped.get(field) in (None, "")]
        if missing:
            logger.warning(
                f"Mapped object for {external_id} misses required fields of {schema.reference}: {', '.join(missing)}"
            )
