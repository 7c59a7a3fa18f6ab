from fastapi import APIRouter

from src.devlog.api.v1 import accounts, auth, projects

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(accounts.router)
api_router.include_router(projects.router)
