from fastapi import APIRouter, Depends, HTTPException, Response
from ..core.events import get_service
from ..errors import StorageUnavailable, ValidationError
from ..models.score import ScoreRequest
from ..service import LeaderboardService
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

@router.post("/scores", status_code=204, response_class=Response)
async def submit_score(data: ScoreRequest, service: LeaderboardService = Depends(get_service)):
    """
    Record a new score.

    - **player_name**: Display name of the player (non-empty)
    - **score**: Signed integer score
    """
    try:
        await service.submit_score(data.player_name, data.score)
        return Response(status_code=204)
    except HTTPException:
        raise
    except ValidationError as e:
        logger.warning(f"Rejected score submission: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailable as e:
        logger.error(f"Storage unavailable while recording score: {e}")
        raise HTTPException(status_code=503, detail="Service temporarily unavailable")
    except Exception as e:
        logger.error(f"Error recording score: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
