"""
Dishka DI Container Setup.

- AppProvider: security services, object store, command/query handlers
- Storage providers: UserRepository, MessageRepository, UnitOfWork
    - InMemoryStorageProvider (STORAGE_BACKEND=memory)
    - PrismaStorageProvider   (STORAGE_BACKEND=prisma, prisma_provider.py)
- Session providers: SessionRepository
    - InMemorySessionProvider (SESSION_BACKEND=memory)
    - RedisSessionProvider    (SESSION_BACKEND=redis, redis_provider.py)

Scopes:
- Scope.APP     = created once per container, shared by all requests
- Scope.REQUEST = new instance per HTTP request

The Prisma and Redis providers are imported only when selected, so the
in-memory mode needs neither a generated Prisma client nor a Redis server.
"""

from datetime import timedelta

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from soconnect.application.commands.auth import (
    LoginHandler,
    LogoutHandler,
    RegisterUserHandler,
)
from soconnect.application.commands.messages import (
    SendMessageHandler,
    UploadAttachmentHandler,
)
from soconnect.application.commands.users import DeleteUserHandler
from soconnect.application.queries.auth import AuthorizeHandler
from soconnect.application.queries.conversations import (
    GetConversationHandler,
    ListConversationsHandler,
)
from soconnect.config.settings import Config
from soconnect.domain.ports.object_store import ObjectStore
from soconnect.domain.ports.repositories import (
    MessageRepository,
    SessionRepository,
    UserRepository,
)
from soconnect.domain.ports.unit_of_work import UnitOfWork
from soconnect.infrastructure.memory import (
    InMemoryMessageRepository,
    InMemorySessionRepository,
    InMemoryStore,
    InMemoryUnitOfWork,
    InMemoryUserRepository,
)
from soconnect.infrastructure.security import PasscodeHasher, SessionTokenService
from soconnect.infrastructure.storage import FileStorageService


class AppProvider(Provider):
    """Everything that does not depend on the storage or session backend."""

    # ==================== SECURITY ====================

    @provide(scope=Scope.APP)
    def get_passcode_hasher(self) -> PasscodeHasher:
        return PasscodeHasher(iterations=Config.PASSCODE_HASH_ITERATIONS)

    @provide(scope=Scope.APP)
    def get_session_tokens(self) -> SessionTokenService:
        return SessionTokenService(
            secret=Config.SESSION_SECRET,
            issuer=Config.SESSION_ISSUER,
            ttl=timedelta(minutes=Config.SESSION_TTL_MINUTES),
        )

    # ==================== STORAGE ====================

    @provide(scope=Scope.APP)
    def get_object_store(self) -> ObjectStore:
        return FileStorageService(
            upload_base=Config.UPLOAD_BASE, url_prefix=Config.UPLOAD_URL_PREFIX
        )

    # ==================== HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_register_user_handler(
        self, user_repository: UserRepository, hasher: PasscodeHasher
    ) -> RegisterUserHandler:
        return RegisterUserHandler(user_repository=user_repository, hasher=hasher)

    @provide(scope=Scope.REQUEST)
    def get_login_handler(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository,
        hasher: PasscodeHasher,
        tokens: SessionTokenService,
    ) -> LoginHandler:
        return LoginHandler(
            user_repository=user_repository,
            session_repository=session_repository,
            hasher=hasher,
            tokens=tokens,
            single_session=Config.SINGLE_SESSION_PER_USER,
        )

    @provide(scope=Scope.REQUEST)
    def get_logout_handler(
        self, session_repository: SessionRepository, tokens: SessionTokenService
    ) -> LogoutHandler:
        return LogoutHandler(session_repository=session_repository, tokens=tokens)

    @provide(scope=Scope.REQUEST)
    def get_authorize_handler(
        self, session_repository: SessionRepository, tokens: SessionTokenService
    ) -> AuthorizeHandler:
        return AuthorizeHandler(session_repository=session_repository, tokens=tokens)

    @provide(scope=Scope.REQUEST)
    def get_send_message_handler(
        self, message_repository: MessageRepository, user_repository: UserRepository
    ) -> SendMessageHandler:
        return SendMessageHandler(
            message_repository=message_repository, user_repository=user_repository
        )

    @provide(scope=Scope.REQUEST)
    def get_upload_attachment_handler(
        self,
        message_repository: MessageRepository,
        user_repository: UserRepository,
        object_store: ObjectStore,
    ) -> UploadAttachmentHandler:
        return UploadAttachmentHandler(
            message_repository=message_repository,
            user_repository=user_repository,
            object_store=object_store,
            allowed_types=Config.MIME_TYPES,
            max_bytes=Config.MAX_UPLOAD_BYTES,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_conversations_handler(
        self, message_repository: MessageRepository
    ) -> ListConversationsHandler:
        return ListConversationsHandler(message_repository=message_repository)

    @provide(scope=Scope.REQUEST)
    def get_get_conversation_handler(
        self, message_repository: MessageRepository
    ) -> GetConversationHandler:
        return GetConversationHandler(message_repository=message_repository)

    @provide(scope=Scope.REQUEST)
    def get_delete_user_handler(
        self, unit_of_work: UnitOfWork, session_repository: SessionRepository
    ) -> DeleteUserHandler:
        return DeleteUserHandler(
            unit_of_work=unit_of_work, session_repository=session_repository
        )


class InMemoryStorageProvider(Provider):
    """Users and messages in process memory. One store per container."""

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, store: InMemoryStore) -> UserRepository:
        return InMemoryUserRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, store: InMemoryStore) -> MessageRepository:
        return InMemoryMessageRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, store: InMemoryStore) -> UnitOfWork:
        return InMemoryUnitOfWork(store)


class InMemorySessionProvider(Provider):
    @provide(scope=Scope.APP)
    def get_session_repository(self) -> SessionRepository:
        return InMemorySessionRepository()


def create_container(*overrides: Provider) -> AsyncContainer:
    """
    Build the container for the configured backends.

    Args:
        overrides: Extra providers appended last, so they win over the defaults
    """
    if Config.STORAGE_BACKEND == "prisma":
        from soconnect.setup.ioc.prisma_provider import PrismaStorageProvider

        storage: Provider = PrismaStorageProvider()
    elif Config.STORAGE_BACKEND == "memory":
        storage = InMemoryStorageProvider()
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND: {Config.STORAGE_BACKEND!r}")

    if Config.SESSION_BACKEND == "redis":
        from soconnect.setup.ioc.redis_provider import RedisSessionProvider

        sessions: Provider = RedisSessionProvider()
    elif Config.SESSION_BACKEND == "memory":
        sessions = InMemorySessionProvider()
    else:
        raise ValueError(f"Unknown SESSION_BACKEND: {Config.SESSION_BACKEND!r}")

    return make_async_container(AppProvider(), storage, sessions, *overrides)
