# Middleware package init
"""
Bookmarks Service — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [Security Headers] → [CORS] → Route Handler

    1. Request ID first, so every later log line can carry it
    2. Logging measures status and duration of everything below it
    3. Security headers are added to every response, errors included
    4. CORS is FastAPI's CORSMiddleware (handles preflight)
"""
