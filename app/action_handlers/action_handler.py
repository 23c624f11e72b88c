from abc import ABC, abstractmethod
import logging
from typing import Any

from app.exceptions import SyncException
from app.models.action import ActionConfiguration
from app.stats import get_stats

logger = logging.getLogger(__name__)

SCHEMA_BASE_URL = "https://development.zaaksysteem.nl/schemas"
ACTION_HANDLER_SCHEMA = "https://docs.commongateway.nl/schemas/ActionHandler.schema.json"


class ActionHandler(ABC):
    """
    Entry point of a synchronization for an event.

    `run` validates the configuration, executes the synchronization and hands back the resulting
    payload. A failing synchronization never breaks the chain of actions of an event: the error
    is logged and the payload is returned as it was received.
    """

    name: str = ""

    @abstractmethod
    def get_configuration(self) -> dict[str, Any]:
        """
        Returns the configuration this handler accepts as a json-schema.
        """
        ...

    @abstractmethod
    def execute(self, data: dict[str, Any], configuration: ActionConfiguration) -> dict[str, Any]:
        ...

    def run(self, data: dict[str, Any], configuration: dict[str, Any]) -> dict[str, Any]:
        logger.debug(f"{self.name} -> run")
        stats = get_stats()

        try:
            with stats.timer(f"sync.{self.name}.duration"):
                result = self.execute(data, ActionConfiguration.from_dict(configuration))
        except SyncException as e:
            logger.error(f"{self.name}: {e}")
            stats.inc(f"sync.{self.name}.{type(e).__name__}")
            return data
        except Exception as e:
            logger.exception(f"{self.name}: unexpected error {type(e).__name__}: {e}")
            stats.inc(f"sync.{self.name}.unexpected")
            return data

        stats.inc(f"sync.{self.name}.success")
        return result

    def _schema(self, title: str, description: str, properties: dict[str, Any]) -> dict[str, Any]:
        return {
            "$id": f"{SCHEMA_BASE_URL}/{title}.ActionHandler.schema.json",
            "$schema": ACTION_HANDLER_SCHEMA,
            "title": title,
            "description": description,
            "required": ["source", "schema", "mapping"],
            "properties": properties,
        }


def source_property(description: str) -> dict[str, Any]:
    return {
        "type": "string",
        "description": description,
        "example": "https://development.zaaksysteem.nl/source/xxllnc.zaaksysteemv2.source.json",
    }


def schema_property(description: str, example: str) -> dict[str, Any]:
    return {"type": "string", "description": description, "example": example}


def mapping_property(description: str, example: str) -> dict[str, Any]:
    return {"type": "string", "description": description, "example": example}


def endpoint_property(description: str, example: str) -> dict[str, Any]:
    return {"type": "string", "description": description, "example": example}
