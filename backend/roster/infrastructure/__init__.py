"""Infrastructure Layer — database access, repositories, and cross-cutting concerns.

Invariants:
    - Repositories translate rows to core entities; ORM rows never leave this layer
    - All SQLAlchemy failures mapped to core errors (ConflictError / DatabaseError)

Design Decisions:
    - Repositories never commit; the service's transactional() scope does (ADR: ExMA single responsibility)
"""
