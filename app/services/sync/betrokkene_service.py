import logging
from typing import Any

from app.exceptions import FetchError, NotFoundError, PrerequisiteMissingError
from app.models.action import ActionConfiguration
from app.models.synchronization.lookup import LookupKey
from app.services.api.call_service import CallService
from app.services.entity.object_service import ObjectService
from app.services.entity.synchronization_service import SynchronizationService
from app.services.gateway.resource_service import GatewayResourceService
from app.utils import get_by_path

logger = logging.getLogger(__name__)

DEFAULT_CASE_ENDPOINT = "/case"


class CaseBetrokkeneService:
    """
    Synchronizes a subject of a zaaksysteem case (requestor, assignee) to a betrokkene and adds
    that betrokkene to the taak of the notification.
    """

    role: str = ""
    source_id_path: str = ""
    required_path: str | None = None

    def __init__(
        self,
        resource_service: GatewayResourceService,
        call_service: CallService,
        synchronization_service: SynchronizationService,
        object_service: ObjectService,
    ) -> None:
        self.__resource_service = resource_service
        self.__call_service = call_service
        self.__synchronization_service = synchronization_service
        self.__object_service = object_service

    def synchronize(self, data: dict[str, Any], configuration: ActionConfiguration) -> dict[str, Any]:
        case_uuid = data.get("case_uuid")
        if not case_uuid or not isinstance(case_uuid, str):
            raise PrerequisiteMissingError(f"Case uuid is not set, can not sync {self.role} to betrokkene")

        taak_id = data.get("taakId")
        if not taak_id or not isinstance(taak_id, str):
            raise PrerequisiteMissingError(f"No taakId given, can not add {self.role} betrokkene to a taak")

        if self.__object_service.get_object(taak_id) is None:
            raise NotFoundError(f"Taak not found with id {taak_id}, can not add {self.role} betrokkene to it")

        source = self.__resource_service.require_source(configuration.source)
        schema = self.__resource_service.require_schema(configuration.schema_ref)
        mapping = self.__resource_service.require_mapping(configuration.mapping)
        endpoint = f"{(configuration.endpoint or DEFAULT_CASE_ENDPOINT).rstrip('/')}/{case_uuid}"

        logger.info(f"Fetching case with case id: {case_uuid}..")
        try:
            response = self.__call_service.call(source=source, endpoint=endpoint, method="GET")
            case = self.__call_service.decode_response(source=source, response=response)
        except FetchError as e:
            raise FetchError(f"Failed to fetch case with case id: {case_uuid}, message: {e}") from e

        if self.required_path is not None and get_by_path(case, self.required_path) in (None, ""):
            raise PrerequisiteMissingError(
                f"Case {self.role} {self.required_path.rsplit('.', 1)[-1]} is not set, can not sync {self.role} to betrokkene"
            )

        synchronization = self.__synchronization_service.reconcile(
            source=source,
            schema=schema,
            mapping=mapping,
            source_record=case,
            lookup_key=LookupKey.by_path(self.source_id_path),
            endpoint=endpoint,
        )
        betrokkene_id = str(synchronization.local_id)

        taak = self.__object_service.add_relation(taak_id, "betrokkenen", betrokkene_id)
        if taak is None:
            raise NotFoundError(f"Taak not found with id {taak_id}, can not add betrokkene to it")

        logger.debug(f"Added {self.role} betrokkene {betrokkene_id} to taak {taak_id}")
        return {**data, f"{self.role}BetrokkeneId": betrokkene_id}


class RequestorToBetrokkeneService(CaseBetrokkeneService):
    role = "requestor"
    source_id_path = "result.instance.requestor.reference"
    required_path = "result.instance.requestor.instance.subject.instance.personal_number"


class AssigneeToBetrokkeneService(CaseBetrokkeneService):
    role = "assignee"
    source_id_path = "result.instance.assignee.reference"
