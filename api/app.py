"""FastAPI application factory for the mock rollup server."""

from typing import Dict

from fastapi import FastAPI

from api.deps import create_app_state
from api.routes.inputs import router as inputs_router
from api.routes.rollup import router as rollup_router


def create_app() -> FastAPI:
    """Build and return a configured FastAPI application.

    Shared state lives on ``app.state.rollup`` so that route handlers can
    reach the input queue without global variables.
    """
    app = FastAPI(title="Mock Rollup Server", version="0.1.0")
    app.state.rollup = create_app_state()

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    app.include_router(rollup_router)
    app.include_router(inputs_router)

    return app
