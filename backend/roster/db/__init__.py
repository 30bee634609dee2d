"""Database package — declarative Base shared by models and Alembic.

Invariants:
    - Holds metadata only; engines and sessions live in infrastructure/database.py
"""
