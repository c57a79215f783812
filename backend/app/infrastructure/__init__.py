"""Infrastructure Layer — database access, logging, and wiring helpers.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All driver failures mapped to core errors before leaving this package
"""
