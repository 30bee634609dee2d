"""Pydantic Schemas — request/response contracts for API endpoints.

Invariants:
    - Schemas validate types at the system boundary; field rules live in core/aggregate_validator.py
    - Response schemas built from core entities (from_entity / from_domain)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
