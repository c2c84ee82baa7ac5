"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from food_diary.api.nutrition import router as nutrition_router
from food_diary.app_logging import configure_logging
from food_diary.containers import AppContainer
from food_diary.domain.errors import InvalidEntryKind


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(nutrition_router)

    @app.exception_handler(InvalidEntryKind)
    async def invalid_entry_handler(
        request: Request, exc: InvalidEntryKind
    ) -> JSONResponse:
        logger.exception(
            "Malformed log entry while serving %s", request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": f"Data integrity error: {exc.detail}"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
