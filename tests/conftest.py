from typing import Any, Dict
import copy

from collections.abc import Generator
from fastapi import FastAPI
from fastapi.testclient import TestClient
import inject
import pytest

from app.action_handlers.betrokkene_handlers import AssigneeToBetrokkeneHandler, RequestorToBetrokkeneHandler
from app.action_handlers.notification_to_taak_handler import NotificationToTaakHandler
from app.action_handlers.taak_to_task_handler import TaakToTaskHandler
from app.application import create_fastapi_app
from app.config import set_config
from app.container import get_database
from app.db.db import Database
from app.services.api.call_service import CallService
from app.services.entity.object_service import ObjectService
from app.services.entity.synchronization_service import SynchronizationService
from app.services.event_service import EventService
from app.services.gateway.resource_service import GatewayResourceService
from app.services.mapping.mapping_service import MappingService
from app.services.sync.betrokkene_service import AssigneeToBetrokkeneService, RequestorToBetrokkeneService
from app.services.sync.notification_to_taak_service import NotificationToTaakService
from app.services.sync.taak_to_task_service import TaakToTaskService
from app.stats import reset_stats
from tests.mock_data import case, notification, task_list
from tests.test_config import RESOURCES_PATH, get_test_config


@pytest.fixture
def database() -> Generator[Database, Any, None]:
    try:
        db = Database("sqlite:///:memory:")
        db.generate_tables()
        yield db
    except Exception as e:
        raise e


@pytest.fixture
def fastapi_app() -> Generator[FastAPI, None, None]:
    set_config(get_test_config())
    app = create_fastapi_app()
    db = get_database()
    db.generate_tables()
    yield app
    inject.clear()
    reset_stats()


@pytest.fixture
def api_client(fastapi_app: FastAPI) -> TestClient:
    return TestClient(fastapi_app)


@pytest.fixture()
def resource_service() -> GatewayResourceService:
    return GatewayResourceService.from_file(str(RESOURCES_PATH), plugin_name="common-gateway/xxllnc-to-ktb-bundle")


@pytest.fixture()
def object_service(database: Database) -> ObjectService:
    return ObjectService(database)


@pytest.fixture()
def mapping_service() -> MappingService:
    return MappingService()


@pytest.fixture()
def call_service() -> CallService:
    return CallService()


@pytest.fixture()
def synchronization_service(
    database: Database,
    object_service: ObjectService,
    mapping_service: MappingService,
    call_service: CallService,
) -> SynchronizationService:
    return SynchronizationService(
        database=database,
        object_service=object_service,
        mapping_service=mapping_service,
        call_service=call_service,
    )


@pytest.fixture()
def notification_to_taak_service(
    resource_service: GatewayResourceService,
    call_service: CallService,
    synchronization_service: SynchronizationService,
) -> NotificationToTaakService:
    return NotificationToTaakService(resource_service, call_service, synchronization_service)


@pytest.fixture()
def requestor_service(
    resource_service: GatewayResourceService,
    call_service: CallService,
    synchronization_service: SynchronizationService,
    object_service: ObjectService,
) -> RequestorToBetrokkeneService:
    return RequestorToBetrokkeneService(resource_service, call_service, synchronization_service, object_service)


@pytest.fixture()
def assignee_service(
    resource_service: GatewayResourceService,
    call_service: CallService,
    synchronization_service: SynchronizationService,
    object_service: ObjectService,
) -> AssigneeToBetrokkeneService:
    return AssigneeToBetrokkeneService(resource_service, call_service, synchronization_service, object_service)


@pytest.fixture()
def taak_to_task_service(
    resource_service: GatewayResourceService,
    object_service: ObjectService,
    synchronization_service: SynchronizationService,
    mapping_service: MappingService,
) -> TaakToTaskService:
    return TaakToTaskService(resource_service, object_service, synchronization_service, mapping_service)


@pytest.fixture()
def event_service(
    resource_service: GatewayResourceService,
    notification_to_taak_service: NotificationToTaakService,
    requestor_service: RequestorToBetrokkeneService,
    assignee_service: AssigneeToBetrokkeneService,
    taak_to_task_service: TaakToTaskService,
) -> EventService:
    handlers = [
        NotificationToTaakHandler(notification_to_taak_service),
        RequestorToBetrokkeneHandler(requestor_service),
        AssigneeToBetrokkeneHandler(assignee_service),
        TaakToTaskHandler(taak_to_task_service),
    ]
    return EventService(resource_service, {h.name: h for h in handlers})


@pytest.fixture()
def mock_notification() -> Dict[str, Any]:
    return copy.deepcopy(notification)


@pytest.fixture()
def mock_task_list() -> Dict[str, Any]:
    return copy.deepcopy(task_list)


@pytest.fixture()
def mock_case() -> Dict[str, Any]:
    return copy.deepcopy(case)
