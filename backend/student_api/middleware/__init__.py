"""
Student API — Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry the correlation id
    2. Logging: one access line with status and duration per request
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
