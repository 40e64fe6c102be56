# Routes package init
"""
NoteKeep Backend — API Routes Package
======================================

Route Inventory:
    - auth.py:    POST /api/auth/register, /login, /logout; GET /api/auth/me
    - notes.py:   POST/GET /api/notes; GET/PUT/DELETE /api/notes/{id}
    - health.py:  GET  /health

Design Principle:
    Routes stay THIN: they resolve the auth context, run the ownership
    check, call a service, and project the result. Persistence lives in
    services; status codes come from the exception handlers in main.py.
"""
