from uuid import UUID

from pydantic import BaseModel


class SynchronizationQueryParams(BaseModel):
    source_ref: str | None = None
    schema_ref: str | None = None
    local_id: UUID | None = None
    external_id: str | None = None
