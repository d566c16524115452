"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from mn.api.routes import auth, nodes, notebooks

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(nodes.router)
api_router.include_router(notebooks.router)
