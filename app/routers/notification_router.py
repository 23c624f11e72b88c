import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from app.config import get_config
from app.container import get_event_service
from app.services.event_service import EventService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post("", response_model=None, summary="Receives a zaaksysteem notification")
def receive_notification(
    notification: Dict[str, Any] = Body(...),
    service: EventService = Depends(get_event_service),
) -> Dict[str, Any]:
    logger.info(f"Received notification for entity: {notification.get('entity_id')}")
    return service.dispatch(get_config().gateway.notification_event, notification)
