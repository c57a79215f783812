"""Bearer Token Extraction — strips the scheme prefix from an Authorization header.

Invariants:
    - Accepts "jwt <token>", "Bearer <token>", or a raw token
    - Never raises: malformed or empty headers pass through unchanged
"""

_PREFIXES: tuple[str, ...] = ("jwt ", "Bearer ")


def extract_token(auth_header: str) -> str:
    for prefix in _PREFIXES:
        if auth_header.startswith(prefix):
            return auth_header[len(prefix):]
    return auth_header
