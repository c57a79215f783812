"""User Schemas — permissive Pydantic bodies for the /user endpoints.

Invariants:
    - Every field is optional and untyped (Any): shape checks happen in core/validate_credentials
      so clients get the documented messages instead of generic Pydantic errors
    - Unknown fields are ignored
    - model_fields_set distinguishes "omitted" from explicit null (needed by PUT /settings)

Design Decisions:
    - Pydantic still rejects non-object bodies (arrays, scalars, broken JSON) at the boundary,
      rendered as 400 by the validation error handler
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class _PermissiveBody(BaseModel):
    model_config = ConfigDict(extra="ignore")


class LoginRequest(_PermissiveBody):
    """POST /user/login-v2"""
    email: Any = None
    password: Any = None


class RegisterRequest(_PermissiveBody):
    """POST /user/register"""
    email: Any = None
    password: Any = None
    name: Any = None
    firstname: Any = None
    lastname: Any = None


class ProfileUpdateRequest(_PermissiveBody):
    """PUT /user/profile"""
    firstname: Any = None
    lastname: Any = None


class DevTokenRequest(_PermissiveBody):
    """POST /user/generate-dev-token"""
    label: Any = None
    ttl: Any = None


class UiSettingsUpdateRequest(_PermissiveBody):
    """PUT /user/settings — partial update, both fields optional."""
    sidebarCollapsed: Any = None
    performanceDashboardTimeRange: Any = None
