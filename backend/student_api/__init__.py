"""
Student API — Application Package Initializer
==============================================

What: Marks the `student_api` directory as a Python package.
Why:  Enables module imports like `from student_api.config import Settings`.
Who:  Used by uvicorn, pytest, and the `student-api` console script.

Architecture Note:
    The backend follows the same thin layering for every resource:

    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Auth (bearer gate, JWT, bcrypt)   │  ← Who may write
    ├─────────────────────────────────────┤
    │      Services (Business Logic)      │  ← Presence checks, id parsing
    ├─────────────────────────────────────┤
    │     DocumentStore (Persistence)     │  ← Async MongoDB collections
    └─────────────────────────────────────┘

    Nothing below the routes knows about HTTP; failures travel upward as
    StudentApiError subclasses and are turned into responses in one place
    (see main.register_exception_handlers).
"""

__version__ = "1.0.0"
