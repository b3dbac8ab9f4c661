"""
Maison Catalog API
==================

Layered FastAPI backend for a product catalog and a hero image carousel:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← multipart in, JSON out
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validate, upload, persist
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├──────────────────┬──────────────────┤
    │ Database (async) │ Image host       │  ← SQLAlchemy / Cloudinary
    └──────────────────┴──────────────────┘
"""

__version__ = "1.0.0"
