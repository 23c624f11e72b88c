from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class SynchronizationDto(BaseModel):
    id: UUID
    source_ref: str
    schema_ref: str
    local_id: UUID | None = None
    external_id: str | None = None
    endpoint: str | None = None
    last_synced_at: datetime | None = None
    is_removed: bool = False
    removed_at: datetime | None = None
