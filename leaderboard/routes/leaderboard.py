from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from ..config import service as service_config
from ..core.events import get_service
from ..errors import NotFoundError, StorageUnavailable, ValidationError
from ..models.response import LeaderEntry
from ..service import LeaderboardService
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

@router.get("/scores/top1", response_model=LeaderEntry)
async def get_top_score(service: LeaderboardService = Depends(get_service)):
    """Get the single highest score."""
    try:
        leader = await service.get_top_score()
        return LeaderEntry(player_name=leader.player_name, score=leader.score)
    except HTTPException:
        raise
    except NotFoundError:
        logger.warning("Top score requested but no scores are recorded")
        raise HTTPException(status_code=404, detail="No scores recorded")
    except StorageUnavailable as e:
        logger.error(f"Storage unavailable while getting top score: {e}")
        raise HTTPException(status_code=503, detail="Service temporarily unavailable")
    except Exception as e:
        logger.error(f"Error getting top score: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to get top score")

@router.get("/scores/top", response_model=List[LeaderEntry])
async def get_top_scores(
    count: int = Query(service_config.DEFAULT_COUNT, ge=0, description="Number of scores to return, capped by the service maximum"),
    service: LeaderboardService = Depends(get_service)
):
    """
    Get the highest scores, best first.

    - **count**: Number of scores to return; values above the service maximum are clamped
    """
    try:
        leaders = await service.get_top_scores(count)
        logger.info(f"Returning {len(leaders)} of {count} requested scores")
        return [LeaderEntry(player_name=leader.player_name, score=leader.score) for leader in leaders]
    except HTTPException:
        raise
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailable as e:
        logger.error(f"Storage unavailable while getting top scores: {e}")
        raise HTTPException(status_code=503, detail="Service temporarily unavailable")
    except Exception as e:
        logger.error(f"Error getting top scores: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to get leaderboard")
