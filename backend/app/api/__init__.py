"""API Layer — FastAPI routers and global error handlers.

Invariants:
    - Routers registered explicitly in main.create_app (no auto-discovery)
    - Every response is JSON; failures use the {success: false, msg} envelope
"""
