"""Database Layer — declarative base and standalone session factory.

Invariants:
    - Single async engine per DatabaseSessionManager
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite driver: the store keeps timestamps and UUIDs as TEXT columns
"""
