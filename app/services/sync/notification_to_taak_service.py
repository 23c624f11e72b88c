import logging
from typing import Any

from app.exceptions import FetchError, NotFoundError, PrerequisiteMissingError
from app.models.action import ActionConfiguration
from app.models.synchronization.lookup import LookupKey
from app.services.api.call_service import CallService
from app.services.entity.synchronization_service import SynchronizationService
from app.services.gateway.resource_service import GatewayResourceService

logger = logging.getLogger(__name__)

DEFAULT_TASK_LIST_ENDPOINT = "/api/v2/cm/task/get_task_list"


class NotificationToTaakService:
    """
    Synchronizes the zaaksysteem task of a notification to a taak.

    A notification only names the case and the task, so all tasks of the case are fetched and
    the task of the notification is picked from them.
    """

    def __init__(
        self,
        resource_service: GatewayResourceService,
        call_service: CallService,
        synchronization_service: SynchronizationService,
    ) -> None:
        self.__resource_service = resource_service
        self.__call_service = call_service
        self.__synchronization_service = synchronization_service

    def synchronize_task(self, data: dict[str, Any], configuration: ActionConfiguration) -> dict[str, Any]:
        source = self.__resource_service.require_source(configuration.source)
        schema = self.__resource_service.require_schema(configuration.schema_ref)
        mapping = self.__resource_service.require_mapping(configuration.mapping)

        case_uuid = data.get("case_uuid")
        entity_id = data.get("entity_id")
        if not case_uuid or not entity_id:
            raise PrerequisiteMissingError("Notification has no case_uuid or entity_id, can not sync task to taak")

        if not isinstance(case_uuid, str) or not isinstance(entity_id, str):
            raise PrerequisiteMissingError("Notification case_uuid and entity_id must be strings, can not sync task to taak")

        endpoint = configuration.endpoint or DEFAULT_TASK_LIST_ENDPOINT

        logger.info(f"Fetching tasks for case id: {case_uuid}..")
        try:
            response = self.__call_service.call(
                source=source,
                endpoint=endpoint,
                method="GET",
                query={"filter[relationships.case.id]": case_uuid},
            )
            body = self.__call_service.decode_response(source=source, response=response)
        except FetchError as e:
            raise FetchError(f"Failed to fetch tasks for case: {case_uuid}, message: {e}") from e

        tasks = body.get("data")
        if not isinstance(tasks, list):
            tasks = []

        task = next(
            (t for t in tasks if isinstance(t, dict) and t.get("id") == entity_id),
            None,
        )
        if task is None:
            raise NotFoundError(
                f"Could not find the correct task ({entity_id}) in the tasks of the case ({case_uuid})"
            )

        synchronization = self.__synchronization_service.reconcile(
            source=source,
            schema=schema,
            mapping=mapping,
            source_record=task,
            lookup_key=LookupKey.by_id(str(entity_id)),
            endpoint=endpoint,
        )

        # The taakId is used by the next actions of the notification, like syncing the betrokkenen
        return {**data, "taakId": str(synchronization.local_id)}
