from typing import Any

from app.action_handlers.action_handler import (
    ActionHandler,
    endpoint_property,
    mapping_property,
    schema_property,
    source_property,
)
from app.models.action import ActionConfiguration
from app.services.sync.notification_to_taak_service import NotificationToTaakService


class NotificationToTaakHandler(ActionHandler):
    name = "NotificationToTaakHandler"

    def __init__(self, service: NotificationToTaakService) -> None:
        self.__service = service

    def get_configuration(self) -> dict[str, Any]:
        return self._schema(
            title="NotificationToTaak",
            description="This handler gets through the notification the task and syncs it to taak",
            properties={
                "endpoint": endpoint_property(
                    "The endpoint we request the tasks from.", "/api/v2/cm/task/get_task_list"
                ),
                "source": source_property("The source we use to fetch tasks."),
                "mapping": mapping_property(
                    "The mapping we use for tasks to taken.",
                    "https://commongateway.nl/mapping/xxllnctoktb.TaskToTaak.mapping.json",
                ),
                "schema": schema_property(
                    "The schema of the customerinteractionbundle taak.",
                    "https://commongateway.nl/klant.taak.schema.json",
                ),
            },
        )

    def execute(self, data: dict[str, Any], configuration: ActionConfiguration) -> dict[str, Any]:
        return self.__service.synchronize_task(data, configuration)
