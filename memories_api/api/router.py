from fastapi import APIRouter
from memories_api.api.routes import auth, health, memories
from memories_api.core.config import settings

api_router = APIRouter(prefix=settings.API_PREFIX)

api_router.include_router(health.router, tags=['health'])
api_router.include_router(auth.router)
api_router.include_router(memories.router)
