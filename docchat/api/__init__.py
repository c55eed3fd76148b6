"""
API routes module.

FastAPI routers for all HTTP and WebSocket endpoints.
"""

from fastapi import APIRouter

from .routers import (
    chat_router,
    conversation_router,
    documents_router,
    functions_router,
    health_router,
    sessions_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(sessions_router)
api_router.include_router(documents_router)
api_router.include_router(chat_router)
api_router.include_router(functions_router)
api_router.include_router(conversation_router)

__all__ = ["api_router"]
