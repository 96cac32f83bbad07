from __future__ import annotations

from fastapi import FastAPI

from .check import router as check_router


def create_app() -> FastAPI:
    app = FastAPI(title="labstyle", description="Style-conformance checks for teaching lab documents.")
    app.include_router(check_router)
    return app
