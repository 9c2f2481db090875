"""
Object Store Port - where attachment bytes live.
Implementation: soconnect/infrastructure/storage/file_storage_service.py
"""

from abc import ABC, abstractmethod


class ObjectStore(ABC):
    @abstractmethod
    async def put(self, content: bytes, filename: str, mime_type: str) -> str:
        """Store bytes and return the retrieval path for clients."""
        ...
