# -*- coding: utf-8 -*-
from __future__ import annotations

from fastapi import FastAPI

from .. import __version__
from .routers import router as api_router


def create_app() -> FastAPI:
    """Build the HTTP app exposing the provider configuration routes."""
    app = FastAPI(title="sowlens", version=__version__)
    app.include_router(api_router, prefix="/api")
    return app
