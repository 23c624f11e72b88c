from typing import Any

from app.action_handlers.action_handler import (
    ActionHandler,
    endpoint_property,
    mapping_property,
    schema_property,
    source_property,
)
from app.models.action import ActionConfiguration
from app.services.sync.betrokkene_service import (
    AssigneeToBetrokkeneService,
    CaseBetrokkeneService,
    RequestorToBetrokkeneService,
)


class CaseBetrokkeneHandler(ActionHandler):
    title = ""
    role = ""

    def __init__(self, service: CaseBetrokkeneService) -> None:
        self.__service = service

    def get_configuration(self) -> dict[str, Any]:
        return self._schema(
            title=self.title,
            description=f"This handler fetches the case of a taak and syncs its {self.role} to a betrokkene of the taak",
            properties={
                "endpoint": endpoint_property("The endpoint we request the case from.", "/case"),
                "source": source_property("The source we use to fetch the case."),
                "mapping": mapping_property(
                    f"The mapping we use for the case {self.role} to betrokkene.",
                    f"https://commongateway.nl/mapping/xxllnctoktb.{self.role.capitalize()}ToBetrokkene.mapping.json",
                ),
                "schema": schema_property(
                    "The schema of the customerinteractionbundle betrokkene.",
                    "https://commongateway.nl/klant.betrokkene.schema.json",
                ),
            },
        )

    def execute(self, data: dict[str, Any], configuration: ActionConfiguration) -> dict[str, Any]:
        return self.__service.synchronize(data, configuration)


class RequestorToBetrokkeneHandler(CaseBetrokkeneHandler):
    name = "RequestorToBetrokkeneHandler"
    title = "RequestorToBetrokkene"
    role = "requestor"

    def __init__(self, service: RequestorToBetrokkeneService) -> None:
        super().__init__(service)


class AssigneeToBetrokkeneHandler(CaseBetrokkeneHandler):
    name = "AssigneeToBetrokkeneHandler"
    title = "AssigneeToBetrokkene"
    role = "assignee"

    def __init__(self, service: AssigneeToBetrokkeneService) -> None:
        super().__init__(service)
