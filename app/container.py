from typing import cast

import inject

from app.action_handlers.action_handler import ActionHandler
from app.action_handlers.betrokkene_handlers import AssigneeToBetrokkeneHandler, RequestorToBetrokkeneHandler
from app.action_handlers.notification_to_taak_handler import NotificationToTaakHandler
from app.action_handlers.taak_to_task_handler import TaakToTaskHandler
from app.config import get_config
from app.db.db import Database
from app.services.api.authenticators.factory import AuthenticatorFactory
from app.services.api.call_service import CallService
from app.services.entity.object_service import ObjectService
from app.services.entity.synchronization_service import SynchronizationService
from app.services.event_service import EventService
from app.services.gateway.resource_service import GatewayResourceService
from app.services.mapping.mapping_service import MappingService
from app.services.sync.betrokkene_service import AssigneeToBetrokkeneService, RequestorToBetrokkeneService
from app.services.sync.notification_to_taak_service import NotificationToTaakService
from app.services.sync.taak_to_task_service import TaakToTaskService


def container_config(binder: inject.Binder) -> None:
    config = get_config()

    db = Database(
        dsn=config.database.dsn,
        pool_size=config.database.pool_size,
        max_overflow=config.database.max_overflow,
        pool_pre_ping=config.database.pool_pre_ping,
        pool_recycle=config.database.pool_recycle,
    )
    binder.bind(Database, db)

    resource_service = GatewayResourceService.from_file(
        config.gateway.resources_path, plugin_name=config.gateway.plugin_name
    )
    binder.bind(GatewayResourceService, resource_service)

    object_service = ObjectService(db)
    binder.bind(ObjectService, object_service)

    mapping_service = MappingService()
    call_service = CallService(auth_factory=AuthenticatorFactory())

    synchronization_service = SynchronizationService(
        database=db,
        object_service=object_service,
        mapping_service=mapping_service,
        call_service=call_service,
    )
    binder.bind(SynchronizationService, synchronization_service)

    handlers: list[ActionHandler] = [
        NotificationToTaakHandler(
            NotificationToTaakService(resource_service, call_service, synchronization_service)
        ),
        RequestorToBetrokkeneHandler(
            RequestorToBetrokkeneService(resource_service, call_service, synchronization_service, object_service)
        ),
        AssigneeToBetrokkeneHandler(
            AssigneeToBetrokkeneService(resource_service, call_service, synchronization_service, object_service)
        ),
        TaakToTaskHandler(
            TaakToTaskService(resource_service, object_service, synchronization_service, mapping_service)
        ),
    ]

    event_service = EventService(resource_service, {h.name: h for h in handlers})
    binder.bind(EventService, event_service)


def get_database() -> Database:
    return inject.instance(Database)


def get_object_service() -> ObjectService:
    return inject.instance(ObjectService)


def get_synchronization_service() -> SynchronizationService:
    return inject.instance(SynchronizationService)


def get_event_service() -> EventService:
    return cast(EventService, inject.instance(EventService))


def setup_container() -> None:
    inject.configure(container_config, once=True)
