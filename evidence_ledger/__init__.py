"""
Evidence ledger package.

Design intent:
- Keep the registry core (records, ownership, hash checks) free of transport concerns.
- Expose the core through a thin HTTP layer that only resolves caller identity.
"""
