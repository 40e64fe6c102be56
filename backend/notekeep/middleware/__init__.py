# Middleware package init
"""
NoteKeep Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS]
            → [Session] → Route Handler

    1. Rate Limit FIRST: Reject abusive requests before any processing
    2. Request ID: Generate correlation ID for logging and tracing
    3. Logging: Log request details with the generated request ID
    4. CORS: Applied by FastAPI's CORSMiddleware (credentials allowed,
       the session cookie must cross origins to reach the API)
    5. Session: Starlette's signed-cookie SessionMiddleware populates
       `request.session`, read by notekeep.dependencies.get_principal
"""
