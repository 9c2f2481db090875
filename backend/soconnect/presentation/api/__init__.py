"""
API Routers - FastAPI endpoint definitions.
"""

from soconnect.presentation.api.auth import router as auth_router
from soconnect.presentation.api.messages import router as messages_router
from soconnect.presentation.api.uploads import router as upload_router
from soconnect.presentation.api.conversations import router as conversations_router
from soconnect.presentation.api.admin import router as admin_router

__all__ = [
    "auth_router",
    "messages_router",
    "upload_router",
    "conversations_router",
    "admin_router",
]
