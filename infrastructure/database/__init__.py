"""
Database infrastructure package.

Экспортирует Database и модели реляционной схемы дневника.
"""

from .session import Database
from .models import Base, User, Entry, Photo

__all__ = [
    # Database
    "Database",
    # Модели
    "Base",
    "User",
    "Entry",
    "Photo",
]
