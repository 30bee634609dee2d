"""Services Layer — orchestration of student aggregate operations.

Invariants:
    - Services own transactions; repositories and core functions never commit
    - Input shaping (payload -> entity) kept in student_converter.py, separate from orchestration

Design Decisions:
    - One service class per aggregate, constructed per request session (ADR: ExMA no god objects)
"""
