import asyncio
from fastapi import Request
from ..logger import get_logger
from ..service import LeaderboardService

logger = get_logger()

def get_service(request: Request) -> LeaderboardService:
    """Resolve the service instance the application was built with"""
    return request.app.state.service

async def startup_event(service: LeaderboardService):
    """Open storage and replay the score journal"""
    try:
        await service.initialize()
        logger.info("Leaderboard store initialized")
    except Exception as e:
        logger.error(f"Failed to initialize leaderboard store: {e}")
        raise

async def shutdown_event(service: LeaderboardService, timeout: float = 5.0):
    """Close storage, bounded by timeout"""
    try:
        async with asyncio.timeout(timeout):
            await service.close()
            logger.info("Leaderboard store closed")
    except TimeoutError:
        logger.warning("Shutdown timed out, abandoning storage close")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")
        raise
