from fastapi import APIRouter, Depends, HTTPException
from ..core.events import get_service
from ..models.response import HealthResponse
from ..service import LeaderboardService
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

@router.get("/health", response_model=HealthResponse)
@router.head("/health")
async def health_check(service: LeaderboardService = Depends(get_service)):
    """Health check endpoint; `ready` is false until the store has been replayed"""
    try:
        response = HealthResponse(**service.health())
        logger.debug(f"Health check response: {response.model_dump()}")
        return response
    except Exception as e:
        logger.error(f"Health check error: {e}")
        raise HTTPException(status_code=500, detail="Health check failed")
