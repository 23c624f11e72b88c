from typing import Any

from app.action_handlers.action_handler import (
    ActionHandler,
    endpoint_property,
    mapping_property,
    schema_property,
    source_property,
)
from app.models.action import ActionConfiguration
from app.services.sync.taak_to_task_service import TaakToTaskService


class TaakToTaskHandler(ActionHandler):
    name = "TaakToTaskHandler"

    def __init__(self, service: TaakToTaskService) -> None:
        self.__service = service

    def get_configuration(self) -> dict[str, Any]:
        schema = self._schema(
            title="TaakToTask",
            description="This handler creates, updates or deletes the zaaksysteem task of a taak",
            properties={
                "endpoint": endpoint_property("The endpoint of the zaaksysteem tasks.", "/api/v2/cm/task"),
                "source": source_property("The zaaksysteem v2 source the tasks are synchronized to."),
                "mapping": mapping_property(
                    "The mapping we use for creating and updating tasks.",
                    "https://commongateway.nl/mapping/xxllnctoktb.TaakToTask.mapping.json",
                ),
                "deleteMapping": mapping_property(
                    "The mapping we use for deleting tasks.",
                    "https://commongateway.nl/mapping/xxllnctoktb.TaakToTaskDelete.mapping.json",
                ),
                "schema": schema_property(
                    "The schema of the customerinteractionbundle taak.",
                    "https://commongateway.nl/klant.taak.schema.json",
                ),
            },
        )
        return schema

    def execute(self, data: dict[str, Any], configuration: ActionConfiguration) -> dict[str, Any]:
        return self.__service.synchronize_taak(data, configuration)
