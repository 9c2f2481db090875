"""
DOMAIN LAYER

This layer contains:
- Entities: User, Message, ConversationSummary, Session
- Value Objects: UserCode, MessageId, ConversationKey, AttachmentDescriptor
- Ports: Interfaces that infrastructure implements
- Services: Pure domain logic (no I/O)
- Exceptions: Domain-specific errors

RULES:
1. NO framework imports (no FastAPI, Prisma, Pydantic, etc.)
2. NO I/O operations (no database, no HTTP, no file system)
3. Only depends on Python stdlib
"""
