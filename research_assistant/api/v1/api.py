from fastapi import APIRouter
from research_assistant.api.v1.endpoints import research

api_router = APIRouter()
api_router.include_router(research.router, prefix="/research", tags=["research"])
