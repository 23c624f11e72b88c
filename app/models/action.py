from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.exceptions import ConfigurationError


class SyncAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def from_event(cls, event: str | None) -> "SyncAction":
        """
        Resolves the action from an event name like `object.create`, or from the bare action name.
        """
        if event is None:
            raise ConfigurationError("No current action given")

        name = event.rsplit(".", 1)[-1]
        try:
            return cls(name)
        except ValueError:
            raise ConfigurationError(f"Invalid event thrown: {event}")


class ActionConfiguration(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    source: str
    schema_ref: str = Field(alias="schema")
    mapping: str
    delete_mapping: str | None = Field(default=None, alias="deleteMapping")
    endpoint: str | None = None
    current_action: str | None = Field(default=None, alias="currentAction")

    @classmethod
    def from_dict(cls, configuration: dict[str, Any]) -> "ActionConfiguration":
        try:
            return cls.model_validate(configuration)
        except ValidationError as e:
            missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
            raise ConfigurationError(f"Invalid action configuration, check: {', '.join(missing)}")
