"""
INFRASTRUCTURE LAYER - implementations of domain ports

- persistence/ → Prisma (PostgreSQL) repositories + unit of work
- memory/      → in-process store for development mode and tests
- cache/       → Redis client + Redis session registry
- storage/     → attachment bytes on disk
- security/    → passcode hashing, session tokens
- resilience.py → timeout + transient error translation for external calls
"""
