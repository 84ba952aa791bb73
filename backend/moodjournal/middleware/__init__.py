"""
MoodJournal Backend — Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assigns the correlation ID the other layers log with
    2. Logging: records method, path, status and duration per request
    3. GZip / CORS: provided by Starlette/FastAPI
"""
