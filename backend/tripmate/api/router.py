"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from tripmate.api.routes import trips, items, settlements

api_router = APIRouter()

# Include all route modules
api_router.include_router(trips.router)
api_router.include_router(items.router)
api_router.include_router(settlements.router)
