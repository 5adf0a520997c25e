"""
Notes API — API Routes Package
===============================

Route Inventory:
    - notes.py:   GET/POST /notes, GET/PUT/DELETE /notes/{id}
    - health.py:  GET /health

Routes are thin: they parse the request, call NoteService, and set the
status code and headers. Cache rules live in the service, not here.
"""
