"""
TransientStoreError - Connection failure or timeout against an external store.
Maps to: HTTP 503 Service Unavailable (generic "try again" body)

Safe to retry for idempotent reads only. Appends are never retried blindly,
a retry without an idempotency key could duplicate a message.
"""


class TransientStoreError(Exception):
    code = "TryAgain"

    def __init__(self, message: str = "The store is temporarily unavailable"):
        super().__init__(message)
        self.message = message
