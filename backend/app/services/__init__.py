"""Services Layer — request orchestration over injected collaborators.

Invariants:
    - Services never import FastAPI: they take plain values and raise HiveError
    - Collaborators arrive through constructors, typed by core/repository_protocols
"""
