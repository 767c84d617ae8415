"""
Module 'notifications': modèle de notification et presenter des issues.
"""

from .models import Action, Button, Notification, NotificationKind, NotificationSurface
from .presenter import OutcomePresenter, LoggingSurface, SUCCESS_TITLE

__all__ = [
    "Action",
    "Button",
    "Notification",
    "NotificationKind",
    "NotificationSurface",
    "OutcomePresenter",
    "LoggingSurface",
    "SUCCESS_TITLE",
]
