"""
API orchestration boundary for the evidence ledger.

Design intent:
- Expose thin, typed endpoints over the registry operations.
- Map registry failures to predictable HTTP status codes.
- Keep ownership and uniqueness rules inside the registry, not in routers.
"""
