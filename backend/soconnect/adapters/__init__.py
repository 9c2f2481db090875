"""
Adapters - outbound clients for the SoConnect REST API.
"""

from soconnect.adapters.chat_api_client import ChatApiClient

__all__ = ["ChatApiClient"]
