"""Infrastructure Layer — database engine/session management and logging setup.

Invariants:
    - Infrastructure never imports entity logic from core/ (errors only)
    - All store calls go through DatabaseSessionManager.session()
"""
