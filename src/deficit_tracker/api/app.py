"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from deficit_tracker.api.users import router as users_router
from deficit_tracker.app_logging import configure_logging
from deficit_tracker.containers import AppContainer
from deficit_tracker.domain.errors import MissingProfileDataError, ProfileNotFoundError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(users_router)

    @app.exception_handler(ProfileNotFoundError)
    async def profile_not_found(
        request: Request, exc: ProfileNotFoundError
    ) -> JSONResponse:
        logger.info("Profile lookup failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(MissingProfileDataError)
    async def missing_profile_data(
        request: Request, exc: MissingProfileDataError
    ) -> JSONResponse:
        logger.info("Profile incomplete: %s", exc)
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "missing": exc.missing},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
