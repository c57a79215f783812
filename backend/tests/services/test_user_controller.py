"""User Controller — direct tests of orchestration, error mapping, and logging.

Tests cover:
    - ProfileUpdater capability resolved at construction
    - service error codes mapped per operation (login vs register)
    - authentication never calls find_by_token without a header
    - settings write persists merged preferences or warns when no store exists
    - failures logged with the component tag
    - raised errors carry component, route and (once known) user_id context
"""

import logging

import pytest

from app.core.errors import (
    AccountDisabledError, AuthenticationError, ConflictError, InputValidationError,
    InternalError, OAuthRequiredError, ServiceErrorCode, UserServiceError,
)
from app.services.user_controller import (
    COMPONENT, UserController, map_login_error, map_register_error,
)
from tests.services.fake_user_service import (
    VALID_TOKEN, FakeUpdatingUserService, FakeUserService,
    RecordingPreferencesStore, make_user,
)


def _controller(service, store=None):
    return UserController(
        service, store, jwt_secret="s3cret", jwt_expires_in="7d", default_team_id=3,
    )


# ─── Construction ────────────────────────────────────────────────

def test_profile_updater_detected_when_supported():
    service = FakeUpdatingUserService()
    assert _controller(service).profile_updater is service


def test_profile_updater_absent_when_unsupported():
    assert _controller(FakeUserService()).profile_updater is None


# ─── Error mappers ───────────────────────────────────────────────

def test_map_login_error():
    def mapped(code, message="svc"):
        return map_login_error(UserServiceError(code, message))

    not_found = mapped(ServiceErrorCode.USER_NOT_FOUND)
    assert isinstance(not_found, AuthenticationError)
    assert not_found.message == "Invalid email or password"
    assert mapped(ServiceErrorCode.INVALID_CREDENTIALS).message == "Invalid email or password"
    oauth = mapped(ServiceErrorCode.OAUTH_REQUIRED, "Use OAuth")
    assert isinstance(oauth, OAuthRequiredError)
    assert oauth.message == "Use OAuth"
    assert isinstance(mapped(ServiceErrorCode.ACCOUNT_DISABLED), AccountDisabledError)
    assert mapped(ServiceErrorCode.EMAIL_EXISTS) is None


def test_map_register_error():
    exists = map_register_error(
        UserServiceError(ServiceErrorCode.EMAIL_EXISTS, "dup"),
    )
    assert isinstance(exists, ConflictError)
    assert exists.message == "Email already registered"
    assert map_register_error(
        UserServiceError(ServiceErrorCode.INVALID_CREDENTIALS, "x"),
    ) is None


# ─── Operations ──────────────────────────────────────────────────

async def test_register_passes_configured_team_and_jwt_options():
    service = FakeUserService()
    result = await _controller(service).register(
        "ada@example.com", "12345678", name="Ada",
    )
    fields, options = service.args_of("register")
    assert fields.name == "Ada"
    assert options.default_team_id == 3
    assert options.jwt_secret == "s3cret"
    assert options.expires_in == "7d"
    assert result["current_team_id"] == 3


async def test_authenticate_without_header_skips_lookup():
    service = FakeUserService()
    with pytest.raises(AuthenticationError) as exc:
        await _controller(service).authenticate(None)
    assert exc.value.message == "No token provided"
    assert service.calls == []


async def test_authenticate_empty_header_is_missing():
    service = FakeUserService()
    with pytest.raises(AuthenticationError) as exc:
        await _controller(service).authenticate("")
    assert exc.value.message == "No token provided"


async def test_register_unmapped_code_becomes_internal_error():
    service = FakeUserService()
    service.errors["register"] = UserServiceError(
        ServiceErrorCode.ACCOUNT_DISABLED, "internal detail",
    )
    with pytest.raises(InternalError) as exc:
        await _controller(service).register("ada@example.com", "12345678")
    assert exc.value.message == "Registration failed. Please try again."


async def test_update_settings_persists_merged_preferences():
    user = make_user(preferences={"otherKey": "x"})
    service = FakeUserService({VALID_TOKEN: user})
    store = RecordingPreferencesStore()
    result = await _controller(service, store).update_settings(
        f"jwt {VALID_TOKEN}",
        {"sidebarCollapsed": True, "performanceDashboardTimeRange": None},
        {"sidebarCollapsed"},
    )
    assert result == {
        "success": True,
        "data": {"sidebarCollapsed": True, "performanceDashboardTimeRange": "today"},
    }
    assert store.saved[user.id] == {"otherKey": "x", "sidebarCollapsed": True}
    assert user.preferences == {"otherKey": "x"}


async def test_update_settings_without_store_logs_warning(caplog):
    service = FakeUserService({VALID_TOKEN: make_user()})
    with caplog.at_level(logging.WARNING, logger="app.services.user_controller"):
        result = await _controller(service).update_settings(
            VALID_TOKEN, {"sidebarCollapsed": True}, {"sidebarCollapsed"},
        )
    assert result["data"]["sidebarCollapsed"] is True
    warning = next(r for r in caplog.records if r.levelno == logging.WARNING)
    assert "settings not persisted" in warning.getMessage()
    assert warning.component == COMPONENT


async def test_failures_logged_with_component_tag(caplog):
    service = FakeUserService({VALID_TOKEN: make_user()})
    service.errors["get_dev_tokens"] = RuntimeError("pool exhausted")
    with caplog.at_level(logging.ERROR, logger="app.services.user_controller"):
        with pytest.raises(InternalError):
            await _controller(service).get_dev_tokens(VALID_TOKEN)
    record = next(r for r in caplog.records if r.levelno == logging.ERROR)
    assert record.component == COMPONENT
    assert record.route == "GET /get-dev-tokens"
    assert "pool exhausted" in record.getMessage()
    assert record.exc_info is not None


async def test_internal_error_chains_original_cause():
    service = FakeUserService({VALID_TOKEN: make_user()})
    cause = RuntimeError("boom")
    service.errors["generate_dev_token"] = cause
    with pytest.raises(InternalError) as exc:
        await _controller(service).generate_dev_token(VALID_TOKEN, "ci", 60)
    assert exc.value.__cause__ is cause


# ─── Error context ───────────────────────────────────────────────

async def test_missing_token_error_carries_route_context():
    service = FakeUserService()
    with pytest.raises(AuthenticationError) as exc:
        await _controller(service).get_me(None)
    ctx = exc.value.context
    assert (ctx.component, ctx.route, ctx.user_id) == (COMPONENT, "GET /me", None)


async def test_credential_error_carries_route_context():
    with pytest.raises(InputValidationError) as exc:
        await _controller(FakeUserService()).login("ada@example.com", "123")
    assert exc.value.context.component == COMPONENT
    assert exc.value.context.route == "login-v2"


async def test_failure_after_authentication_carries_user_id():
    service = FakeUserService({VALID_TOKEN: make_user(id=42)})
    service.errors["get_dev_tokens"] = RuntimeError("pool exhausted")
    with pytest.raises(InternalError) as exc:
        await _controller(service).get_dev_tokens(VALID_TOKEN)
    assert exc.value.context.route == "GET /get-dev-tokens"
    assert exc.value.context.user_id == "42"


async def test_mapped_service_error_carries_route_context():
    service = FakeUserService()
    service.errors["register"] = UserServiceError(
        ServiceErrorCode.EMAIL_EXISTS, "duplicate",
    )
    with pytest.raises(ConflictError) as exc:
        await _controller(service).register("ada@example.com", "12345678")
    assert exc.value.context.route == "register"
