"""
AttachmentDescriptor Value Object - metadata binding a stored file to a message.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AttachmentDescriptor:
    file_name: str  # original filename as uploaded
    file_url: str  # retrieval path returned by the object store
    file_type: str  # MIME type
    file_size: int  # bytes

    def __post_init__(self):
        if not self.file_name or not self.file_name.strip():
            raise ValueError("Attachment file name cannot be empty")
        if not self.file_url:
            raise ValueError("Attachment retrieval path cannot be empty")
        if self.file_size < 0:
            raise ValueError("Attachment size cannot be negative")
