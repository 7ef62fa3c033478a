"""Aggregate API routers."""

from fastapi import APIRouter

from .athlete import router as athlete_router
from .auth import router as auth_router
from .segments import router as segments_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    auth_router,
    segments_router,
    athlete_router,
)

__all__ = ["ALL_ROUTERS"]
