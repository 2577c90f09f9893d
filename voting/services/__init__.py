"""Services Layer — application use cases spanning more than one aggregate.

Invariants:
    - Services depend on core Protocols only, never on SQL adapters
"""
