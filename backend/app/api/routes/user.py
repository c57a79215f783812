"""User Routes — /user endpoints for login, registration, profile, tokens, and UI settings.

Invariants:
    - Routes never contain business logic: each unpacks the request and calls UserController
    - Authorization header read as-is; prefix handling belongs to the controller
    - Creation endpoints (register, generate-dev-token) answer 201

Design Decisions:
    - Router built by a function closing over an injected controller instead of a
      module-level router with Depends lookups (ADR: explicit wiring at app construction)
    - Bodies optional: an empty request reaches the controller, which reports the
      documented validation message
"""

from fastapi import APIRouter, Header, status

from app.schemas.user import (
    DevTokenRequest, LoginRequest, ProfileUpdateRequest,
    RegisterRequest, UiSettingsUpdateRequest,
)
from app.services.user_controller import UserController

PREFIX = "/user"


def build_user_router(controller: UserController) -> APIRouter:
    """Bind the /user endpoints to a controller instance."""
    router = APIRouter(prefix=PREFIX, tags=["user"])

    @router.post("/login-v2")
    async def login_v2(body: LoginRequest | None = None):
        """Authenticate with email and password; returns a JWT."""
        body = body or LoginRequest()
        return await controller.login(body.email, body.password)

    @router.post("/register", status_code=status.HTTP_201_CREATED)
    async def register(body: RegisterRequest | None = None):
        """Create an account; returns a JWT."""
        body = body or RegisterRequest()
        return await controller.register(
            body.email, body.password,
            name=body.name, firstname=body.firstname, lastname=body.lastname,
        )

    @router.get("/profile")
    async def get_profile(authorization: str | None = Header(None)):
        return await controller.get_profile(authorization)

    @router.put("/profile")
    async def update_profile(
        body: ProfileUpdateRequest | None = None,
        authorization: str | None = Header(None),
    ):
        body = body or ProfileUpdateRequest()
        return await controller.update_profile(
            authorization, body.firstname, body.lastname,
        )

    @router.get("/me")
    async def get_me(authorization: str | None = Header(None)):
        return await controller.get_me(authorization)

    @router.get("/get-dev-tokens")
    async def get_dev_tokens(authorization: str | None = Header(None)):
        return await controller.get_dev_tokens(authorization)

    @router.post("/generate-dev-token", status_code=status.HTTP_201_CREATED)
    async def generate_dev_token(
        body: DevTokenRequest | None = None,
        authorization: str | None = Header(None),
    ):
        body = body or DevTokenRequest()
        return await controller.generate_dev_token(authorization, body.label, body.ttl)

    @router.get("/settings")
    async def get_settings(authorization: str | None = Header(None)):
        """UI settings from the preferences column, defaults filled in."""
        return await controller.get_settings(authorization)

    @router.put("/settings")
    async def update_settings(
        body: UiSettingsUpdateRequest | None = None,
        authorization: str | None = Header(None),
    ):
        """Partial update of UI settings; other preference keys are preserved."""
        body = body or UiSettingsUpdateRequest()
        return await controller.update_settings(
            authorization, body.model_dump(), body.model_fields_set,
        )

    return router
