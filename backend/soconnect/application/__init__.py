"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- commands/  → Write operations (register, login, logout, send, upload, delete user)
- queries/   → Read operations (authorize, list conversations, fetch conversation)
- sync/      → Polling synchronization engine used by chat clients
- dto/       → Data Transfer Objects
- common/    → Shared interfaces and policies

Rules:
- Depends on Domain layer (and injected services) only
- No HTTP/framework code here
"""
