"""FastAPI application for the framecut planner.

Run with ``uvicorn framecut.web:app``.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from framecut.web.exceptions import register_exception_handlers
from framecut.web.routers import plan_router, validate_router

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    """Build the planner API with its routers and error handlers mounted."""
    app = FastAPI(
        title="Framecut API",
        description="Plan moulding cuts from bars and glass, backing and mat cuts from sheets",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in (plan_router, validate_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()
