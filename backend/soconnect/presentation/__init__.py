"""
PRESENTATION LAYER - HTTP surface

- api/          → FastAPI routers (thin: request → command/query → response)
- dependencies/ → auth dependency (bearer token → AuthorizedUser)
- rate_limit.py → shared slowapi limiter
"""
