"""
Cookbook Backend: Application Package
======================================

Recipe catalog API: recipes, ingredients, units, users and comments with
CRUD endpoints, a faceted recipe search and a bundled seed dataset.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, auth gate
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← search, CRUD, seeding, login
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     DocumentStore (Persistence)     │  ← one async session per request
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
