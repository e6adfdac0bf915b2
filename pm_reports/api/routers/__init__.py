from .admin_private_message_reports import router as admin_private_message_reports_router
from .healthz import router as healthz_router
from .private_messages import router as private_messages_router

__all__ = [
    "admin_private_message_reports_router",
    "healthz_router",
    "private_messages_router",
]
