from fastapi import FastAPI

from .trading_rules import router as trading_rules_router
from .violations import router as violations_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(trading_rules_router)
    app.include_router(violations_router)
