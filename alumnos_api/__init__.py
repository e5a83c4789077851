"""
Alumnos API: Application Package Initializer
============================================

What: Marks the `alumnos_api` directory as a Python package.
Who:  Imported by uvicorn (`alumnos_api.main:app`), the console script and pytest.

Architecture Note:
    The service is a thin layered stack over a single table:

    ┌─────────────────────────────────────┐
    │     Routes (/dalumn, /Alumno, ...)  │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     StudentRepository (services)    │  ← parameterized statements
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database (pooled async engine)  │  ← MySQL via aiomysql
    └─────────────────────────────────────┘

    Nothing is cached between requests: every handler reads or writes
    the DALUMN table directly.
"""

__version__ = "1.0.0"
