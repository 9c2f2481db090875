"""
PORTS - Interfaces that infrastructure implements

A "port" defines WHAT the domain needs, without specifying HOW it's done.

- repositories/   → Data persistence interfaces (users, messages, sessions)
- unit_of_work.py → Transaction scope spanning several repositories
- object_store.py → Byte storage for attachments
"""
