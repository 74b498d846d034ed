from fastapi import APIRouter, Depends

from backend.auth.dependencies import get_storage
from backend.schemas.dashboard import DashboardStats
from backend.storage.storage import Storage

router = APIRouter(tags=['dashboard'])


@router.get('/stats/{user_id}', response_model=DashboardStats)
def get_dashboard_stats(user_id: str, storage: Storage = Depends(get_storage)):
    return storage.compute_dashboard_stats(user_id)
