"""
MoodJournal Backend — Application Package Initializer
======================================================

What: Marks the `moodjournal` directory as a Python package.
Who:  Imported by uvicorn (`moodjournal.main:app`), pytest, and any client
      that wants the pure codec/analytics functions in-process.

Architecture Note:
    The package is layered the same way for both of its components:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (SpanCodec, Analytics)   │  ← Pure, synchronous functions
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Pydantic domain + API models
    └─────────────────────────────────────┘

    There is no persistence layer. Notes arrive in the request body and
    every computation is a function of its inputs plus an explicit "now".
"""

__version__ = "1.0.0"
