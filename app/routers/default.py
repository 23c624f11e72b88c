import logging

from fastapi import APIRouter

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/")
def index() -> dict[str, str]:
    return {
        "name": "xxllnc-to-ktb sync service",
        "description": "Synchronizes zaaksysteem tasks with taken of the klantinteractie objects",
    }
