"""Journal module - записи дневника, их хранение и фотографии."""

from .models import JournalEntry
from .entry_store import EntryStore, JsonEntryStore
from .repository import SqlEntryStore
from .attachments import AttachmentHandler
from .service import create_entry_with_photos
from .exceptions import (
    JournalError,
    ValidationError,
    NotFoundError,
    StorageError,
    ConfigurationError,
    ExternalDependencyError,
    JournalApiError,
)

__all__ = [
    # Models
    "JournalEntry",
    # Stores
    "EntryStore",
    "JsonEntryStore",
    "SqlEntryStore",
    # Attachments
    "AttachmentHandler",
    "create_entry_with_photos",
    # Exceptions
    "JournalError",
    "ValidationError",
    "NotFoundError",
    "StorageError",
    "ConfigurationError",
    "ExternalDependencyError",
    "JournalApiError",
]
