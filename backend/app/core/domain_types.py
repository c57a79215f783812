"""Domain Types — value objects exchanged with the user-data service.

Invariants:
    - UserView is read-only: the controller never mutates a user record directly
    - Option bundles (JwtOptions, RegistrationOptions, DevTokenOptions) are opaque here,
      passed through to the service untouched
    - DEFAULT_UI_SETTINGS is the single source for settings fallbacks

Design Decisions:
    - Frozen dataclasses over dicts: attribute access, no accidental mutation
      (ADR: the service owns user state)
    - UserId is int | str: service backends differ (serial vs UUID keys)
"""

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any


# ─── Identity Types ──────────────────────────────────────────────

UserId = int | str
TeamId = int | str


# ─── User Projections ────────────────────────────────────────────

@dataclass(frozen=True)
class UserView:
    """Read-only projection of a user record returned by the service."""
    id: UserId
    email: str
    name: str | None = None
    firstname: str | None = None
    lastname: str | None = None
    avatar_url: str | None = None
    role_id: int | None = None
    roles: list[str] | None = None
    company_name: str | None = None
    current_team_id: TeamId | None = None
    preferences: dict[str, Any] | None = None


@dataclass(frozen=True)
class AuthResult:
    """Issued token plus the identity fields echoed back to the client."""
    token: str
    email: str
    firstname: str | None = None
    lastname: str | None = None
    name: str | None = None
    current_team_id: TeamId | None = None
    created_at: datetime | str | None = None


LoginResult = AuthResult
RegistrationResult = AuthResult


# ─── Option Bundles ──────────────────────────────────────────────

@dataclass(frozen=True)
class JwtOptions:
    secret: str
    expires_in: str


@dataclass(frozen=True)
class RegistrationOptions:
    jwt_secret: str
    expires_in: str
    default_team_id: int = 1


@dataclass(frozen=True)
class DevTokenOptions:
    label: Any
    ttl: Any
    jwt_secret: str


@dataclass(frozen=True)
class RegistrationFields:
    """Normalized registration input forwarded to the service."""
    email: str
    password: str
    name: Any = None
    firstname: Any = None
    lastname: Any = None


@dataclass(frozen=True)
class ProfileUpdate:
    firstname: Any = None
    lastname: Any = None


# ─── UI Settings ─────────────────────────────────────────────────

DEFAULT_UI_SETTINGS = MappingProxyType({
    "sidebarCollapsed": False,
    "performanceDashboardTimeRange": "today",
})

