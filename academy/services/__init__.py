"""Service layer package."""

from academy.services.activity import ActivityService
from academy.services.auth import AuthService
from academy.services.catalog import CatalogService
from academy.services.gamification import GamificationService
from academy.services.notifications import NotificationService
from academy.services.users import UserService

__all__ = [
    "ActivityService",
    "AuthService",
    "CatalogService",
    "GamificationService",
    "NotificationService",
    "UserService",
]
