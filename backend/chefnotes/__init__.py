"""
ChefNotes Backend — Application Package Initializer
===================================================

What: Marks the `chefnotes` directory as a Python package.
Why:  Enables module imports like `from chefnotes.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Aggregation, synthesis, orchestration
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Entity records + Pydantic contracts
    ├─────────────────────────────────────┤
    │        Store (Persistence)          │  ← In-memory repository per entity kind
    └─────────────────────────────────────┘

    - Routes validate input and pick status codes, nothing else
    - Services hold the recipe workflow and can be tested without HTTP
    - Models are what the store keeps; Schemas are what the API exposes
    - The store sits behind an abstract interface so a durable backend
      can replace it without touching the services
"""

__version__ = "1.0.0"
