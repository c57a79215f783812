"""User Controller — authentication, profile, developer token, and UI settings operations.

Invariants:
    - Input shape is validated before any delegate call (400/401 short-circuit)
    - Delegate calls are awaited one at a time: find_by_token first, then read/update
    - Every failure leaves as exactly one HiveError; unclassified failures become
      InternalError carrying the operation's fixed client message
    - That error carries ErrorContext(component, route, user_id once known), which the
      global handler logs before responding
    - Service messages are never echoed except for OAUTH_REQUIRED
    - Missing preferences store: settings are computed and returned, not persisted (warning)

Design Decisions:
    - Collaborators injected at construction (ADR: no per-request lookup in app state)
    - update_profile capability resolved once with isinstance(ProfileUpdater)
    - Per-operation error mappers translate ServiceErrorCode into HTTP-level errors,
      so the taxonomy stays closed and explicit
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from contextlib import asynccontextmanager
from typing import Any

from app.core.domain_types import (
    AuthResult, DevTokenOptions, JwtOptions, ProfileUpdate,
    RegistrationFields, RegistrationOptions, UserView,
)
from app.core.errors import (
    AccountDisabledError, AuthenticationError, ConflictError, ErrorContext, HiveError,
    InputValidationError, InternalError, OAuthRequiredError,
    ServiceErrorCode, UserServiceError,
)
from app.core.extract_token import extract_token
from app.core.merge_ui_settings import (
    apply_ui_settings_update, build_ui_settings_update, resolve_ui_settings,
)
from app.core.repository_protocols import (
    PreferencesStore, ProfileUpdater, UserDataService,
)
from app.core.validate_credentials import (
    LOGIN_MIN_PASSWORD_LENGTH, REGISTER_MIN_PASSWORD_LENGTH, validate_credentials,
)

logger = logging.getLogger(__name__)

COMPONENT = "UserController"

ErrorMapper = Callable[[UserServiceError], HiveError | None]


def map_login_error(error: UserServiceError) -> HiveError | None:
    if error.error_code in (
        ServiceErrorCode.USER_NOT_FOUND, ServiceErrorCode.INVALID_CREDENTIALS,
    ):
        return AuthenticationError("Invalid email or password")
    if error.error_code == ServiceErrorCode.OAUTH_REQUIRED:
        return OAuthRequiredError(error.message)
    if error.error_code == ServiceErrorCode.ACCOUNT_DISABLED:
        return AccountDisabledError()
    return None


def map_register_error(error: UserServiceError) -> HiveError | None:
    if error.error_code == ServiceErrorCode.EMAIL_EXISTS:
        return ConflictError("Email already registered")
    return None


def _auth_payload(result: AuthResult) -> dict[str, Any]:
    return {
        "token": result.token,
        "email": result.email,
        "firstname": result.firstname,
        "lastname": result.lastname,
        "name": result.name,
        "current_team_id": result.current_team_id,
        "create_time": result.created_at,
    }


class UserController:
    """Transport-level validation and response shaping over a UserDataService."""

    def __init__(
        self,
        service: UserDataService,
        preferences_store: PreferencesStore | None = None,
        *,
        jwt_secret: str,
        jwt_expires_in: str,
        default_team_id: int = 1,
    ):
        self.service = service
        self.preferences_store = preferences_store
        self.profile_updater: ProfileUpdater | None = (
            service if isinstance(service, ProfileUpdater) else None
        )
        self.jwt_secret = jwt_secret
        self.jwt_expires_in = jwt_expires_in
        self.default_team_id = default_team_id

    # ─── Failure handling ────────────────────────────────────────

    @asynccontextmanager
    async def _handled(
        self, route: str, failure_message: str, mapper: ErrorMapper | None = None,
    ):
        """Translate anything escaping an operation into one client-facing HiveError.

        Yields the ErrorContext attached to that error; authenticate() fills in user_id.
        """
        context = ErrorContext(component=COMPONENT, route=route)
        try:
            yield context
        except (InputValidationError, AuthenticationError) as e:
            e.context = context
            raise
        except UserServiceError as e:
            logger.error(
                f"[{COMPONENT}] {route} error: {e.message}",
                extra={
                    "component": COMPONENT, "route": route,
                    "user_id": context.user_id, "error_code": e.code,
                },
            )
            mapped = (mapper(e) if mapper else None) or InternalError(failure_message)
            mapped.context = context
            raise mapped from e
        except Exception as e:
            logger.error(
                f"[{COMPONENT}] {route} error: {e}",
                extra={
                    "component": COMPONENT, "route": route,
                    "user_id": context.user_id,
                },
                exc_info=True,
            )
            raise InternalError(failure_message, context) from e

    async def authenticate(
        self, authorization: str | None, context: ErrorContext | None = None,
    ) -> UserView:
        """Resolve the caller from the Authorization header or raise 401."""
        if not authorization:
            raise AuthenticationError("No token provided")
        user = await self.service.find_by_token(extract_token(authorization))
        if not user:
            raise AuthenticationError("Invalid token")
        if context is not None:
            context.user_id = str(user.id)
        return user

    # ─── Credentials ─────────────────────────────────────────────

    async def login(self, email: Any, password: Any) -> dict[str, Any]:
        """POST /login-v2"""
        async with self._handled(
            "login-v2", "Login failed. Please try again.", map_login_error,
        ):
            email, password = validate_credentials(
                email, password, LOGIN_MIN_PASSWORD_LENGTH,
            )
            result = await self.service.login(
                email, password,
                JwtOptions(secret=self.jwt_secret, expires_in=self.jwt_expires_in),
            )
        logger.info(
            f"[{COMPONENT}] login-v2: User {email} logged in successfully",
            extra={"component": COMPONENT, "route": "login-v2"},
        )
        return {"success": True, **_auth_payload(result)}

    async def register(
        self, email: Any, password: Any,
        name: Any = None, firstname: Any = None, lastname: Any = None,
    ) -> dict[str, Any]:
        """POST /register"""
        async with self._handled(
            "register", "Registration failed. Please try again.", map_register_error,
        ):
            email, password = validate_credentials(
                email, password, REGISTER_MIN_PASSWORD_LENGTH,
            )
            result = await self.service.register(
                RegistrationFields(
                    email=email, password=password,
                    name=name, firstname=firstname, lastname=lastname,
                ),
                RegistrationOptions(
                    jwt_secret=self.jwt_secret,
                    expires_in=self.jwt_expires_in,
                    default_team_id=self.default_team_id,
                ),
            )
        logger.info(
            f"[{COMPONENT}] register: User {email} registered successfully",
            extra={"component": COMPONENT, "route": "register"},
        )
        return {"success": True, **_auth_payload(result)}

    # ─── Profile ─────────────────────────────────────────────────

    async def get_profile(self, authorization: str | None) -> dict[str, Any]:
        """GET /profile — shape expected by the frontend profile page."""
        async with self._handled("GET /profile", "Failed to get user profile") as ctx:
            user = await self.authenticate(authorization, ctx)
            return {
                "data": {
                    "firstname": user.firstname or "",
                    "lastname": user.lastname or "",
                    "email": user.email,
                    "company_name": user.company_name or None,
                    "profile_img_url": user.avatar_url or None,
                    "roleId": user.role_id or 1,
                    "user_id": str(user.id),
                    "team_id": str(user.current_team_id or 1),
                    "roles": user.roles or ["user"],
                },
            }

    async def update_profile(
        self, authorization: str | None, firstname: Any, lastname: Any,
    ) -> dict[str, Any]:
        """PUT /profile"""
        async with self._handled("PUT /profile", "Failed to update profile") as ctx:
            user = await self.authenticate(authorization, ctx)
            if self.profile_updater is not None:
                await self.profile_updater.update_profile(
                    user.id, ProfileUpdate(firstname=firstname, lastname=lastname),
                )
            else:
                logger.debug(
                    f"[{COMPONENT}] PUT /profile: service has no update_profile, skipped",
                )
        return {"message": "Profile updated successfully"}

    async def get_me(self, authorization: str | None) -> dict[str, Any]:
        """GET /me"""
        async with self._handled("GET /me", "Failed to get user info") as ctx:
            user = await self.authenticate(authorization, ctx)
        return {
            "success": True,
            "user": {
                "id": user.id,
                "email": user.email,
                "name": user.name,
                "firstname": user.firstname,
                "lastname": user.lastname,
                "current_team_id": user.current_team_id,
                "avatar_url": user.avatar_url,
            },
        }

    # ─── Developer tokens ────────────────────────────────────────

    async def get_dev_tokens(self, authorization: str | None) -> dict[str, Any]:
        """GET /get-dev-tokens"""
        async with self._handled(
            "GET /get-dev-tokens", "Failed to get API tokens",
        ) as ctx:
            user = await self.authenticate(authorization, ctx)
            tokens = await self.service.get_dev_tokens(user)
        return {"success": True, "data": tokens}

    async def generate_dev_token(
        self, authorization: str | None, label: Any, ttl: Any,
    ) -> dict[str, Any]:
        """POST /generate-dev-token"""
        async with self._handled(
            "POST /generate-dev-token", "Failed to generate API token",
        ) as ctx:
            user = await self.authenticate(authorization, ctx)
            token_result = await self.service.generate_dev_token(
                user,
                DevTokenOptions(label=label, ttl=ttl, jwt_secret=self.jwt_secret),
            )
        logger.info(
            f"[{COMPONENT}] generate-dev-token: Created token for user {user.id}",
            extra={
                "component": COMPONENT, "route": "generate-dev-token",
                "user_id": str(user.id),
            },
        )
        return {"success": True, "data": token_result}

    # ─── UI settings ─────────────────────────────────────────────

    async def get_settings(self, authorization: str | None) -> dict[str, Any]:
        """GET /settings — stored UI settings merged with defaults."""
        async with self._handled("GET /settings", "Failed to get settings") as ctx:
            user = await self.authenticate(authorization, ctx)
            ui_settings = resolve_ui_settings(user.preferences)
        return {"success": True, "data": ui_settings}

    async def update_settings(
        self,
        authorization: str | None,
        body: Mapping[str, Any],
        supplied: Iterable[str],
    ) -> dict[str, Any]:
        """PUT /settings — partial update, shallow-merged into existing preferences."""
        async with self._handled("PUT /settings", "Failed to update settings") as ctx:
            user = await self.authenticate(authorization, ctx)
            updates = build_ui_settings_update(body, supplied)
            new_preferences = apply_ui_settings_update(user.preferences, updates)

            if self.preferences_store is not None:
                await self.preferences_store.save_preferences(user.id, new_preferences)
            else:
                logger.warning(
                    f"[{COMPONENT}] PUT /settings: No database pool available, "
                    "settings not persisted",
                    extra={"component": COMPONENT, "route": "PUT /settings"},
                )
            ui_settings = resolve_ui_settings(new_preferences)
        return {"success": True, "data": ui_settings}
