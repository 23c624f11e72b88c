from collections.abc import Sequence
from fastapi import APIRouter, Depends

from app.container import get_synchronization_service
from app.models.synchronization.dto import SynchronizationDto
from app.models.synchronization.query_params import SynchronizationQueryParams
from app.services.entity.synchronization_service import SynchronizationService

router = APIRouter(prefix="/synchronizations", tags=["Synchronizations"])


@router.get("", response_model=None)
def find(
    params: SynchronizationQueryParams = Depends(),
    service: SynchronizationService = Depends(get_synchronization_service),
) -> Sequence[SynchronizationDto]:
    return service.find(**params.model_dump())
