# leaderboard service entrypoint

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse

from . import __version__
from . import config
from .core.events import shutdown_event, startup_event
from .logger import configure_logging, get_logger
from .routes import health, leaderboard, score
from .service import LeaderboardService

logger = get_logger()

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400 Bad Request"""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return ORJSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

def create_app(service: Optional[LeaderboardService] = None) -> FastAPI:
    """Build the application around a service instance (one is built from config if omitted)"""
    configure_logging(config.service.LOG_LEVEL)
    if service is None:
        service = LeaderboardService.from_config(config.storage, config.service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await startup_event(app.state.service)
        try:
            yield
        finally:
            await shutdown_event(app.state.service, config.service.SHUTDOWN_TIMEOUT)

    app = FastAPI(
        default_response_class=ORJSONResponse,
        title="Leaderboard Service",
        description="Ranked score store: submit scores, read the top score and the top N",
        version=__version__,
        lifespan=lifespan
    )
    app.state.service = service
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(score.router)
    app.include_router(leaderboard.router)
    app.include_router(health.router)
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "leaderboard.main:app",
        host=config.service.HOST,
        port=config.service.PORT,
        log_level=config.service.LOG_LEVEL.lower()
    )
