"""
FileStorageService - attachment bytes on local disk.

Implements the ObjectStore port. Files land flat under UPLOAD_BASE with a
sanitized, timestamp-prefixed name; the retrieval path handed back to the
message log is UPLOAD_URL_PREFIX/<stored name>, served by the API app.

Disk writes are blocking, so they run in a worker thread and are bounded by
STORE_TIMEOUT_SECONDS like every other external call.
"""

import asyncio
import os
import re
import logging
from datetime import datetime

from soconnect.config.settings import Config
from soconnect.domain.ports.object_store import ObjectStore
from soconnect.infrastructure.resilience import guarded

logger = logging.getLogger(__name__)


class FileStorageService(ObjectStore):
    def __init__(self, upload_base: str = None, url_prefix: str = None):
        """
        Args:
            upload_base: Directory for uploads (default: Config.UPLOAD_BASE)
            url_prefix: Public path prefix (default: Config.UPLOAD_URL_PREFIX)
        """
        self.upload_base = upload_base or Config.UPLOAD_BASE
        self.url_prefix = (url_prefix or Config.UPLOAD_URL_PREFIX).rstrip("/")

    async def put(self, content: bytes, filename: str, mime_type: str) -> str:
        path = await guarded(
            "disk.write",
            asyncio.to_thread(self.save_file, content, self.upload_base, filename),
            transient=(OSError,),
        )
        return f"{self.url_prefix}/{os.path.basename(path)}"

    def save_file(
        self,
        content: bytes,
        directory: str,
        filename: str,
        make_unique: bool = True,
    ) -> str:
        """
        Save file content to disk.

        Args:
            content: File content as bytes
            directory: Target directory (will be created if not exists)
            filename: Original filename
            make_unique: If True, prepend timestamp to make filename unique

        Returns:
            Path to saved file
        """
        os.makedirs(directory, exist_ok=True)

        safe_filename = self._sanitize_filename(filename)
        if make_unique:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S%f")
            safe_filename = f"{timestamp}_{safe_filename}"

        file_path = os.path.join(directory, safe_filename)

        # "xb" so two uploads in the same microsecond never overwrite each other
        with open(file_path, "xb") as f:
            f.write(content)

        logger.debug(f"[FileStorage] Saved file: {file_path} ({len(content)} bytes)")
        return file_path

    def _sanitize_filename(self, filename: str) -> str:
        # Drop any directory part, then replace unsafe characters
        safe = re.sub(r"[^\w\-_\. ]", "_", os.path.basename(filename or ""))
        safe = safe.strip().lstrip(".")
        if not safe:
            safe = "unnamed_file"
        return safe
