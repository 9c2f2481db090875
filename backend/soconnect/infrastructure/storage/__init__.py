"""Attachment storage - bytes on local disk."""

from soconnect.infrastructure.storage.file_storage_service import FileStorageService

__all__ = ["FileStorageService"]
