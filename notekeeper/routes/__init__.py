# Routes package init
"""
NoteKeeper Backend - API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:   /api/notes CRUD, listing and /api/notes/{id}/stats
    - health.py:  GET /health (service health check)

Routes stay thin: they extract data from the request, call NoteService, and
map the result to a response schema. Business rules live in services.
"""
