"""UI Settings Merge — projects and updates the UI subset of a user's preferences.

Invariants:
    - resolve_ui_settings is PURE: returns a new dict, never mutates preferences
    - Absent or null values fall back to DEFAULT_UI_SETTINGS
    - Preferences that are not a mapping (null, raw JSON text) are read as empty
    - apply_ui_settings_update is a shallow merge: unrelated preference keys survive
    - sidebarCollapsed is only applied when it is a real bool (not 0/1, not "true")
    - performanceDashboardTimeRange is applied whenever supplied, null included

Design Decisions:
    - Caller passes the set of supplied keys: JSON null and "omitted" differ on write
      but are treated alike on read
"""

from collections.abc import Iterable, Mapping
from typing import Any

from app.core.domain_types import DEFAULT_UI_SETTINGS


def _as_mapping(preferences: Any) -> Mapping[str, Any]:
    return preferences if isinstance(preferences, Mapping) else {}


def resolve_ui_settings(preferences: Any) -> dict[str, Any]:
    """Extract UI settings from preferences, merged with defaults."""
    preferences = _as_mapping(preferences)
    resolved = {}
    for key, default in DEFAULT_UI_SETTINGS.items():
        value = preferences.get(key)
        resolved[key] = default if value is None else value
    return resolved


def build_ui_settings_update(
    body: Mapping[str, Any], supplied: Iterable[str],
) -> dict[str, Any]:
    """Keep only the UI settings fields the client actually supplied."""
    supplied = set(supplied)
    updates: dict[str, Any] = {}
    sidebar = body.get("sidebarCollapsed")
    if "sidebarCollapsed" in supplied and isinstance(sidebar, bool):
        updates["sidebarCollapsed"] = sidebar
    if "performanceDashboardTimeRange" in supplied:
        updates["performanceDashboardTimeRange"] = body.get(
            "performanceDashboardTimeRange",
        )
    return updates


def apply_ui_settings_update(
    preferences: Any, updates: Mapping[str, Any],
) -> dict[str, Any]:
    """Shallow-merge updates into existing preferences. Pure."""
    return {**_as_mapping(preferences), **updates}
