"""
Database schema, seeding, and migrations.

This package is for repo-level DB operations:
- Table definitions for cities, customers and orders
- Reset-and-reseed procedure (`python -m db.seed`)
- Alembic migrations config
"""
