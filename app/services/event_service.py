import logging
from typing import Any, Mapping

from app.action_handlers.action_handler import ActionHandler
from app.models.gateway.dto import ActionDto
from app.services.gateway.resource_service import GatewayResourceService
from app.utils import get_by_path

logger = logging.getLogger(__name__)


class EventService:
    """
    Dispatches an event to the actions that listen to it. Actions run in order of priority and
    each action receives the payload returned by the previous one.
    """

    def __init__(self, resource_service: GatewayResourceService, handlers: Mapping[str, ActionHandler]) -> None:
        self.__resource_service = resource_service
        self.__handlers = dict(handlers)

    def dispatch(self, event: str, payload: dict[str, Any]) -> dict[str, Any]:
        actions = [a for a in self.__resource_service.get_actions() if self.__matches(a, event, payload)]
        logger.info(f"Dispatching {event} to {len(actions)} action(s)")

        for action in actions:
            handler = self.__handlers.get(action.handler)
            if handler is None:
                logger.error(f"No handler {action.handler} registered for action {action.reference}")
                continue

            configuration = {**action.configuration, "currentAction": event}
            payload = handler.run(payload, configuration)

        return payload

    @staticmethod
    def __matches(action: ActionDto, event: str, payload: dict[str, Any]) -> bool:
        if not action.is_enabled or event not in action.listens:
            return False

        for path, expected in action.conditions.items():
            value = get_by_path(payload, path)
            if isinstance(expected, list):
                if value not in expected:
                    return False
            elif value != expected:
                return False

        return True
