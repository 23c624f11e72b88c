import json
import logging
from typing import Any, List, TypeVar

from app.exceptions import ConfigurationError
from app.models.gateway.dto import ActionDto, MappingDto, SchemaDto, SourceDto

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GatewayResourceService:
    """
    Resolves sources, schemas, mappings and actions by their reference. The resources are read
    once from a JSON file with the top level keys `sources`, `schemas`, `mappings` and `actions`.
    """

    def __init__(
        self,
        sources: List[SourceDto],
        schemas: List[SchemaDto],
        mappings: List[MappingDto],
        actions: List[ActionDto],
        plugin_name: str = "",
    ) -> None:
        self.__sources = {s.reference: s for s in sources}
        self.__schemas = {s.reference: s for s in schemas}
        self.__mappings = {m.reference: m for m in mappings}
        self.__actions = sorted(actions, key=lambda a: a.priority, reverse=True)
        self.__plugin_name = plugin_name

    @classmethod
    def from_file(cls, json_path: str, plugin_name: str = "") -> "GatewayResourceService":
        data = cls._read_resources_file(json_path)
        return cls(
            sources=[SourceDto(**item) for item in data.get("sources", [])],
            schemas=[SchemaDto(**item) for item in data.get("schemas", [])],
            mappings=[MappingDto(**item) for item in data.get("mappings", [])],
            actions=[ActionDto(**item) for item in data.get("actions", [])],
            plugin_name=plugin_name,
        )

    def get_source(self, reference: str | None) -> SourceDto | None:
        return self.__resolve(self.__sources, "source", reference)

    def get_schema(self, reference: str | None) -> SchemaDto | None:
        return self.__resolve(self.__schemas, "schema", reference)

    def get_mapping(self, reference: str | None) -> MappingDto | None:
        return self.__resolve(self.__mappings, "mapping", reference)

    def require_source(self, reference: str | None) -> SourceDto:
        return self.__require(self.get_source(reference), "source", reference)

    def require_schema(self, reference: str | None) -> SchemaDto:
        return self.__require(self.get_schema(reference), "schema", reference)

    def require_mapping(self, reference: str | None) -> MappingDto:
        return self.__require(self.get_mapping(reference), "mapping", reference)

    def get_action(self, reference: str | None) -> ActionDto | None:
        return next((a for a in self.__actions if a.reference == reference), None)

    def get_actions(self) -> List[ActionDto]:
        return list(self.__actions)

    def __resolve(self, resources: dict[str, Any], kind: str, reference: str | None) -> Any:
        if reference is None:
            logger.error(f"No {kind} reference given ({self.__plugin_name})")
            return None

        resource = resources.get(reference)
        if resource is None:
            logger.error(f"Could not find {kind} with reference: {reference} ({self.__plugin_name})")

        return resource

    @staticmethod
    def __require(resource: T | None, kind: str, reference: str | None) -> T:
        if resource is None:
            raise ConfigurationError(f"Could not resolve {kind}: {reference}")
        return resource

    @staticmethod
    def _read_resources_file(json_path: str) -> dict[str, Any]:
        try:
            with open(json_path) as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            raise ValueError(f"Error processing gateway resources file: {e}")

        if not isinstance(data, dict):
            raise ValueError("Error processing gateway resources file: expected a JSON object")

        return data
