"""Message log commands."""

from .send_message import SendMessageCommand, SendMessageHandler
from .upload_attachment import UploadAttachmentCommand, UploadAttachmentHandler

__all__ = [
    "SendMessageCommand",
    "SendMessageHandler",
    "UploadAttachmentCommand",
    "UploadAttachmentHandler",
]
