from collections.abc import Sequence
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response

from app.container import get_event_service, get_object_service
from app.models.object.dto import ObjectCreateDto, ObjectDto
from app.services.entity.object_service import ObjectService
from app.services.event_service import EventService

router = APIRouter(prefix="/objects", tags=["Objects"])

CREATE_EVENT = "object.create"
UPDATE_EVENT = "object.update"
DELETE_EVENT = "object.delete"


@router.get("", response_model=None)
def find(
    schema: str | None = None,
    service: ObjectService = Depends(get_object_service),
) -> Sequence[ObjectDto]:
    return service.find(schema_ref=schema)


@router.post("", response_model=None, status_code=201)
def create(
    body: ObjectCreateDto,
    service: ObjectService = Depends(get_object_service),
    events: EventService = Depends(get_event_service),
) -> ObjectDto:
    dto = service.create(body.schema_ref, body.data)
    events.dispatch(CREATE_EVENT, dto.to_payload())
    return service.get_one(dto.id)


@router.get("/{object_id}", response_model=None)
def get_one(
    object_id: str,
    service: ObjectService = Depends(get_object_service),
) -> ObjectDto:
    return service.get_one(object_id)


@router.put("/{object_id}", response_model=None)
def replace(
    object_id: str,
    data: Dict[str, Any] = Body(...),
    service: ObjectService = Depends(get_object_service),
    events: EventService = Depends(get_event_service),
) -> ObjectDto:
    dto = service.replace(object_id, data)
    events.dispatch(UPDATE_EVENT, dto.to_payload())
    return service.get_one(dto.id)


@router.delete("/{object_id}", status_code=204)
def delete(
    object_id: str,
    service: ObjectService = Depends(get_object_service),
    events: EventService = Depends(get_event_service),
) -> Response:
    # The task is removed from the zaaksysteem while the taak still exists
    dto = service.get_one(object_id)
    events.dispatch(DELETE_EVENT, dto.to_payload())
    service.delete(dto.id)
    return Response(status_code=204)
