"""
API Routers - FastAPI endpoint definitions.
"""

from bookmybook.presentation.api.auth import router as auth_router
from bookmybook.presentation.api.listings import router as listings_router
from bookmybook.presentation.api.uploads import router as uploads_router
from bookmybook.presentation.api.conversations import router as conversations_router
from bookmybook.presentation.api.messages import router as messages_router

__all__ = [
    "auth_router",
    "listings_router",
    "uploads_router",
    "conversations_router",
    "messages_router",
]
