"""Core Layer — entities, identity types, timestamp codec, errors and contracts. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, repositories/, infrastructure/, models/ or db/
    - Entity constructors and mutators fail only with ValidationError

Design Decisions:
    - Functional core separated from imperative shell: the adapters depend on
      core Protocols, never the reverse
"""
