"""Main FastAPI application."""
import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from concierge.config import Settings, settings
from concierge.models.chat import ChatResponse
from concierge.models.places import PlacesSearchResponse, SearchStatusEnum
from concierge.routers import chat, places, redirect

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def invalid_body_handler(request: Request, exc: RequestValidationError):
    """
    Chat and places always answer 200 with a typed body, even for bodies
    that are not JSON or do not fit the request model.
    """
    path = request.url.path.rstrip("/")
    errors = exc.errors()
    summary = errors[0].get("msg", "invalid request") if errors else "invalid request"

    if path == "/api/chat":
        logger.warning(f"Invalid chat body: {summary}")
        return JSONResponse(ChatResponse(reply=chat.SNAG_REPLY).model_dump())
    if path == "/api/places":
        logger.warning(f"Invalid places body: {summary}")
        body = PlacesSearchResponse(
            results=[], status=SearchStatusEnum.ERROR.value, error=f"Invalid request body: {summary}"
        )
        return JSONResponse(body.model_dump(exclude_unset=True))
    return await request_validation_exception_handler(request, exc)


def create_app(app_settings: Settings) -> FastAPI:
    # Create FastAPI app
    app = FastAPI(
        title="Wynwood Concierge API",
        description="Chat relay, affiliate redirects and nearby places for the Miami Hotel Guide widget",
        version="1.0.0",
        docs_url="/docs" if app_settings.environment == "development" else None,
        redoc_url="/redoc" if app_settings.environment == "development" else None,
    )

    # Configure CORS. Preflights from origins other than ALLOW_ORIGIN get 400.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_settings.allow_origin],
        allow_methods=["*"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(RequestValidationError, invalid_body_handler)

    # Include routers
    app.include_router(chat.router, prefix="/api")
    app.include_router(places.router, prefix="/api")
    app.include_router(redirect.router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Welcome to Wynwood Concierge API",
            "version": "1.0.0",
            "docs": "/docs" if app_settings.environment == "development" else "disabled",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "concierge.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
