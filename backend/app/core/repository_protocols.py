"""Boundary Protocols — contracts between the controller and its collaborators.

Invariants:
    - Controller NEVER imports a concrete service or driver — only these Protocols
    - All IO operations are async because implementations do IO
    - find_by_token returns None for unknown/expired tokens (never raises for that case)
    - Business failures surface as UserServiceError carrying a ServiceErrorCode

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - update_profile split into ProfileUpdater: optional capability, resolved once with
      isinstance() when the controller is constructed, never probed per request
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from app.core.domain_types import (
    AuthResult, DevTokenOptions, JwtOptions, ProfileUpdate,
    RegistrationFields, RegistrationOptions, UserId, UserView,
)


class UserDataService(Protocol):
    """Contract for user authentication and token issuance — implemented by the deployment."""
    async def login(
        self, email: str, password: str, options: JwtOptions,
    ) -> AuthResult: ...
    async def register(
        self, fields: RegistrationFields, options: RegistrationOptions,
    ) -> AuthResult: ...
    async def find_by_token(self, token: str) -> UserView | None: ...
    async def get_dev_tokens(self, user: UserView) -> Sequence[Any]: ...
    async def generate_dev_token(
        self, user: UserView, options: DevTokenOptions,
    ) -> Any: ...


@runtime_checkable
class ProfileUpdater(Protocol):
    """Optional capability: persist first/last name changes."""
    async def update_profile(self, user_id: UserId, update: ProfileUpdate) -> None: ...


class PreferencesStore(Protocol):
    """Contract for persisting the preferences mapping of a user."""
    async def save_preferences(
        self, user_id: UserId, preferences: Mapping[str, Any],
    ) -> None: ...
    async def health_check(self) -> bool: ...
