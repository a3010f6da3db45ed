"""API v1 router aggregation."""

from fastapi import APIRouter

from flyak.api.v1 import auth, health

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
