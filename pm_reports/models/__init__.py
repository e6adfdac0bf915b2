# Imported so Alembic and create_all see every table
# pm_reports/models/__init__.py
from .base import Base
from .person import Person
from .private_message import PrivateMessage
from .private_message_report import PrivateMessageReport

__all__ = [
    "Base",
    "Person",
    "PrivateMessage",
    "PrivateMessageReport",
]
