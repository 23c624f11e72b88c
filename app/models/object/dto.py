from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class ObjectDto(BaseModel):
    id: UUID
    schema_ref: str
    data: dict[str, Any]
    created_at: datetime | None = None
    modified_at: datetime | None = None

    def to_payload(self) -> dict[str, Any]:
        """
        Returns the object in the shape that is passed to action handlers: the object data with
        a `_self` block describing the object itself.
        """
        return {
            **self.data,
            "_self": {
                "id": str(self.id),
                "schema": self.schema_ref,
            },
        }


class ObjectCreateDto(BaseModel):
    schema_ref: str
    data: dict[str, Any]
