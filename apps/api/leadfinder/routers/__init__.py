from .auth import router as auth_router
from .users import router as users_router
from .contacts import router as contacts_router
from .search import router as search_router
from .conversations import router as conversations_router
from .followup import router as followup_router

ROUTERS = (
    auth_router,
    users_router,
    contacts_router,
    search_router,
    conversations_router,
    followup_router,
)

__all__ = [
    "ROUTERS",
    "auth_router",
    "users_router",
    "contacts_router",
    "search_router",
    "conversations_router",
    "followup_router",
]
