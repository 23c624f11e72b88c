import logging
from typing import Any
from uuid import UUID, uuid4

from yarl import URL

from app.exceptions import NotFoundError, PrerequisiteMissingError, WriteBackFailure
from app.models.action import ActionConfiguration, SyncAction
from app.models.gateway.dto import MappingDto, SourceDto
from app.models.synchronization.dto import SynchronizationDto
from app.services.entity.object_service import ObjectService
from app.services.entity.synchronization_service import SynchronizationService
from app.services.gateway.resource_service import GatewayResourceService
from app.services.mapping.mapping_service import MappingService
from app.utils import get_by_path

logger = logging.getLogger(__name__)

DEFAULT_TASK_ENDPOINT = "/api/v2/cm/task"


class TaakToTaskService:
    """
    Synchronizes a taak to its zaaksysteem v2 task. Handles create, update and delete.

    The zaak of the taak must already be synchronized as a case in the zaaksysteem, except when
    deleting. The zaaksysteem confirms a write with `data.success`; only then is the link of the
    taak updated.
    """

    def __init__(
        self,
        resource_service: GatewayResourceService,
        object_service: ObjectService,
        synchronization_service: SynchronizationService,
        mapping_service: MappingService,
    ) -> None:
        self.__resource_service = resource_service
        self.__object_service = object_service
        self.__synchronization_service = synchronization_service
        self.__mapping_service = mapping_service

    def synchronize_taak(self, data: dict[str, Any], configuration: ActionConfiguration) -> dict[str, Any]:
        action = SyncAction.from_event(configuration.current_action)
        source = self.__resource_service.require_source(configuration.source)
        self.__resource_service.require_schema(configuration.schema_ref)

        taak_id = get_by_path(data, "_self.id")
        taak = self.__object_service.get_object(taak_id)
        if taak is None:
            raise NotFoundError(f"Could not find taak with id: {taak_id}")

        link = self.__synchronization_service.get_by_object(source, taak.id)

        match action:
            case SyncAction.CREATE:
                if link is not None and link.external_id is not None and not link.is_removed:
                    logger.warning(f"Taak {taak.id} already has task {link.external_id}, creating a new one")
                task_id = str(uuid4())
                payload = self.__task_payload(data, taak.data.get("zaak"), source, task_id)
                mapping = self.__resource_service.require_mapping(configuration.mapping)
            case SyncAction.UPDATE:
                task_id = self.__get_task_id(link, taak.id)
                payload = self.__task_payload(data, taak.data.get("zaak"), source, task_id)
                mapping = self.__resource_service.require_mapping(configuration.mapping)
            case SyncAction.DELETE:
                task_id = self.__get_task_id(link, taak.id)
                payload = {"task_uuid": task_id}
                mapping = self.__resource_service.require_mapping(configuration.delete_mapping)

        endpoint = f"{(configuration.endpoint or DEFAULT_TASK_ENDPOINT).rstrip('/')}/{action.value}"
        self.__write(source, endpoint, mapping, payload)

        if action is SyncAction.DELETE and link is not None:
            self.__synchronization_service.mark_removed(link)
            logger.info(f"Successfully deleted task {task_id} of taak with id: {taak.id}")
            return data

        self.__synchronization_service.attach_external_id(
            source=source,
            schema_ref=taak.schema_ref,
            local_id=taak.id,
            external_id=task_id,
            endpoint=endpoint,
        )
        logger.info(f"Successfully synchronized taak with id: {taak.id} and sourceId: {task_id}")
        return {**data, "taskId": task_id}

    def __write(self, source: SourceDto, endpoint: str, mapping: MappingDto, payload: dict[str, Any]) -> None:
        logger.debug("Mapping taak to task")
        object_array = self.__mapping_service.mapping(mapping, payload)

        response = self.__synchronization_service.push(source, endpoint, object_array)
        if get_by_path(response, "data.success") is not True:
            raise WriteBackFailure(
                "No success message received from zaaksysteem, something went wrong synchronizing task."
            )

    def __task_payload(
        self, data: dict[str, Any], zaak_url: Any, source: SourceDto, task_id: str
    ) -> dict[str, Any]:
        case_id = self.__get_zaak_source_id(zaak_url, source)
        return {**data, "case_uuid": case_id, "task_uuid": task_id}

    @staticmethod
    def __get_task_id(link: SynchronizationDto | None, taak_id: UUID) -> str:
        if link is None or link.external_id is None or link.is_removed:
            raise PrerequisiteMissingError(f"Taak {taak_id} has no synchronized task in the zaaksysteem")

        return link.external_id

    def __get_zaak_source_id(self, zaak_url: Any, source: SourceDto) -> str:
        """
        Returns the case id in the zaaksysteem of the zaak the taak belongs to.
        """
        if not isinstance(zaak_url, str) or not self.__is_http_url(zaak_url):
            raise PrerequisiteMissingError("Stopping sync, taak.zaak is not set or not a url.")

        zaak_id = URL(zaak_url).path.rstrip("/").rsplit("/", 1)[-1]
        try:
            UUID(zaak_id)
        except ValueError:
            raise PrerequisiteMissingError("Stopping sync, taak.zaak its id is invalid.")

        zaak = self.__object_service.get_object(zaak_id)
        if zaak is None:
            raise PrerequisiteMissingError(f"Stopping sync, could not find zaak with id: {zaak_id}.")

        zaak_link = self.__synchronization_service.get_by_object(source, zaak.id)
        if zaak_link is None or zaak_link.external_id is None:
            raise PrerequisiteMissingError(
                f"Stopping sync, could not find a sourceId on the zaak: {zaak_id} of the taak."
            )

        return zaak_link.external_id

    @staticmethod
    def __is_http_url(value: str) -> bool:
        try:
            url = URL(value)
        except ValueError:
            return False

        return url.is_absolute() and url.scheme in ("http", "https") and bool(url.host)
