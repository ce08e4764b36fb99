"""
Main application module for the clipview backend.

This file sets up the FastAPI application, configures CORS so a
browser viewer can call the API from another origin, and exposes a
simple health check endpoint.  Routers for clipping and stored scenes
are included under the `/api` namespace.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes_clip import router as clip_router
from .api.routes_scenes import router as scenes_router
from .services.scenes_store import init_db  # type: ignore


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    # Create the schema up front so requests made without the lifespan
    # events (e.g. a TestClient used outside a ``with`` block) work too.
    # init_db is idempotent.
    init_db()

    app = FastAPI(title="clipview")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(clip_router, prefix="/api", tags=["clip"])
    app.include_router(scenes_router, prefix="/api", tags=["scenes"])

    return app


# Create the application instance.  Uvicorn will import this when
# running `uvicorn clipview.main:app` from within the backend directory.
app = create_app()
