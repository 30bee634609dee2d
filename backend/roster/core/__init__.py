"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure; generate_id_bytes is the only source of randomness

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
