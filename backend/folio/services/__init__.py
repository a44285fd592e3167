"""Services Layer — entity services, query dispatch, fan-out retrieval, listings.

Invariants:
    - Services own orchestration; store access goes through VersionedTable only
"""
