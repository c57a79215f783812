"""Route Modules — one file per resource/concern.

Invariants:
    - Each module exposes a build_*_router(...) taking its collaborators explicitly
    - Routes never contain business logic (delegate to services)
"""
