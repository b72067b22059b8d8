"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body uses the {success, data?, error?, message?} envelope
"""
