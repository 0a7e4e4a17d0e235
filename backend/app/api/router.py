"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import auth, categories, records

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(categories.router)
api_router.include_router(records.router)
