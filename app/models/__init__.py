"""Convenience imports for Alembic metadata discovery."""

from app.models.notification_read_state import NotificationReadState  # noqa: F401
