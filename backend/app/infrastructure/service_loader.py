"""Service Loader — resolves the user-data service factory named in settings.

Invariants:
    - Resolution happens once, when the application is built (never per request)
    - The factory is called with the Settings instance and must return a UserDataService
    - Any failure surfaces as ConfigurationError naming the offending setting

Design Decisions:
    - "package.module:attribute" spec, same convention as uvicorn/gunicorn app paths
"""

import importlib
import logging
from collections.abc import Callable
from typing import Any

from app.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

SETTING_NAME = "USER_SERVICE_FACTORY"


def resolve_factory(path: str | None) -> Callable[..., Any]:
    """Import the callable at "module:attr"."""
    if not path:
        raise ConfigurationError(
            f"{SETTING_NAME} is not set; cannot build the user-data service",
            SETTING_NAME,
        )
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(
            f"{SETTING_NAME} must look like 'package.module:attribute', got {path!r}",
            SETTING_NAME,
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"Cannot import {module_name!r} from {SETTING_NAME}: {e}", SETTING_NAME,
        ) from e
    factory = getattr(module, attr, None)
    if not callable(factory):
        raise ConfigurationError(
            f"{path!r} does not name a callable", SETTING_NAME,
        )
    return factory


def load_user_service(path: str | None, settings: Any) -> Any:
    factory = resolve_factory(path)
    service = factory(settings)
    logger.info(f"User-data service loaded from {path}")
    return service
