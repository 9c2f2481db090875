"""
ChatApiClient - async client for the SoConnect REST API.

Implements MessageSource, so a SyncEngine can poll a remote server through
it. Holds the session token after login.

Error mapping (server body: {"error": <code>, "detail": <message>}):
- 401                  → token cleared, AuthError subclass (forced logout)
- 429, 5xx, transport  → TransientStoreError
- other 4xx            → the domain exception named by `error`
"""

import logging
from typing import Optional

import httpx

from soconnect.application.dto.auth import LoginResultDTO, UserDTO
from soconnect.application.dto.conversation import ConversationSummaryDTO
from soconnect.application.dto.message import MessageDTO
from soconnect.application.sync.ports import MessageSource
from soconnect.config.settings import Config
from soconnect.domain.exceptions import (
    AttachmentTooLargeError,
    CodeAlreadyRegisteredError,
    ConflictError,
    DomainValidationError,
    EmptyMessageError,
    EntityNotFoundError,
    InvalidCredentialsError,
    InvalidUserCodeError,
    SameParticipantError,
    TransientStoreError,
    UnauthenticatedError,
    UnsupportedTypeError,
)

logger = logging.getLogger(__name__)

ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (
        DomainValidationError,
        InvalidUserCodeError,
        EmptyMessageError,
        SameParticipantError,
        UnsupportedTypeError,
        AttachmentTooLargeError,
        ConflictError,
        CodeAlreadyRegisteredError,
        EntityNotFoundError,
    )
}


class ChatApiClient(MessageSource):
    def __init__(
        self,
        base_url: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Server root (default: Config.API_BASE_URL)
            timeout: Per-request timeout in seconds (default: Config.CLIENT_TIMEOUT_SECONDS)
            transport: Custom httpx transport, e.g. httpx.ASGITransport in tests
        """
        self.token: Optional[str] = None
        self.user: Optional[UserDTO] = None
        self._client = httpx.AsyncClient(
            base_url=base_url or Config.API_BASE_URL,
            timeout=timeout or Config.CLIENT_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "ChatApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    # ==================== SESSION ====================

    async def register(self, name: str, code: str, passcode: str) -> None:
        await self._request(
            "POST",
            "/register",
            json={"name": name, "code": code, "passcode": passcode},
            authenticated=False,
        )

    async def login(self, code: str, passcode: str) -> UserDTO:
        data = await self._request(
            "POST",
            "/login",
            json={"code": code, "passcode": passcode},
            authenticated=False,
        )
        result = LoginResultDTO.model_validate(data)
        self.token = result.token
        self.user = result.user
        logger.info(f"[Client] Logged in as {result.user.code}")
        return result.user

    async def logout(self) -> None:
        """Always succeeds locally; the server call is best effort."""
        token, self.token, self.user = self.token, None, None
        if token is None:
            return
        try:
            await self._client.post(
                "/logout", headers={"Authorization": f"Bearer {token}"}
            )
        except httpx.TransportError as e:
            logger.warning(f"[Client] Logout request failed, token dropped locally: {e}")

    # ==================== READS ====================

    async def list_conversations(self) -> list[ConversationSummaryDTO]:
        data = await self._request("GET", "/conversations")
        return [ConversationSummaryDTO.model_validate(item) for item in data]

    async def fetch_conversation(
        self,
        counterparty: str,
        limit: Optional[int] = None,
        before_id: Optional[int] = None,
    ) -> list[MessageDTO]:
        params = {}
        if limit is not None:
            params["limit"] = limit
        if before_id is not None:
            params["before_id"] = before_id
        data = await self._request(
            "GET", f"/conversations/{counterparty}", params=params
        )
        return [MessageDTO.model_validate(item) for item in data]

    # ==================== WRITES ====================

    async def send_text(self, counterparty: str, text: str) -> MessageDTO:
        data = await self._request(
            "POST", "/messages", json={"to": counterparty, "text": text}
        )
        return MessageDTO.model_validate(data["message"])

    async def send_attachment(
        self,
        counterparty: str,
        content: bytes,
        filename: str,
        mime_type: str,
        caption: Optional[str] = None,
    ) -> MessageDTO:
        form = {"to": counterparty}
        if caption is not None:
            form["caption"] = caption
        data = await self._request(
            "POST",
            "/upload",
            data=form,
            files={"file": (filename, content, mime_type)},
        )
        return MessageDTO.model_validate(data["message"])

    # ==================== TRANSPORT ====================

    async def _request(self, method: str, path: str, authenticated: bool = True, **kwargs):
        headers = {}
        if authenticated:
            if self.token is None:
                raise UnauthenticatedError("Not logged in")
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"[Client] {method} {path} failed: {type(e).__name__}: {e}")
            raise TransientStoreError() from e

        if response.status_code < 400:
            return response.json()
        self._raise_for_error(response, authenticated)

    def _raise_for_error(self, response: httpx.Response, authenticated: bool) -> None:
        code, detail = None, response.text
        try:
            body = response.json()
            code = body.get("error")
            detail = body.get("detail") or detail
        except (ValueError, AttributeError):
            pass

        if response.status_code == 401:
            if code == InvalidCredentialsError.code:
                raise InvalidCredentialsError()
            if authenticated:
                logger.warning("[Client] Session rejected by server, token cleared")
                self.token = None
                self.user = None
            raise UnauthenticatedError(detail or "Session is no longer valid")

        if response.status_code == 429 or response.status_code >= 500:
            raise TransientStoreError()

        exc_class = ERRORS_BY_CODE.get(code)
        if exc_class is not None:
            raise exc_class(detail)
        if response.status_code == 404:
            raise EntityNotFoundError(detail)
        response.raise_for_status()
