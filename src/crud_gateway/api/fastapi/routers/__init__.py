from __future__ import annotations

import importlib
import logging
import pkgutil
from types import ModuleType
from typing import Optional, Set

from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _should_skip_module(module_name: str, exclude_segments: Set[str]) -> bool:
    """
    Returns True if the module should be skipped based on:
    - private/dunder final segment
    - excluded path segments
    """
    parts = module_name.split(".")
    if parts[-1].startswith("_"):
        return True
    return any(seg in exclude_segments for seg in parts)


def register_all_routers(
        app: FastAPI,
        *,
        base_package: Optional[str] = None,
        prefix: str = "",
        exclude: Optional[Set[str]] = None,
) -> None:
    """
    Discover and register every FastAPI router under a routers package.

    Args:
        app: FastAPI application instance.
        base_package: Import path to the routers package. Defaults to this package.
        prefix: Path prefix applied to every router.
        exclude: Path segments whose modules are skipped.

    Behavior:
        - Any module under the package with a top-level `router` variable is included.
        - Modules whose final segment starts with '_' are skipped.
        - ROUTER_PREFIX / ROUTER_TAG / INCLUDE_ROUTER_IN_SCHEMA module attributes
          customize inclusion.
        - Import errors propagate; a broken routers module must not start silently.
    """
    base_package = base_package or __name__
    package_module: ModuleType = importlib.import_module(base_package)
    if not hasattr(package_module, "__path__"):
        raise RuntimeError(f"Provided base_package '{base_package}' is not a package (no __path__).")

    exclude_set = set(exclude or ())

    for _, module_name, _ in pkgutil.walk_packages(
            package_module.__path__, prefix=f"{base_package}."
    ):
        if _should_skip_module(module_name, exclude_set):
            logger.debug("Skipping router module due to exclusion/private: %s", module_name)
            continue
        module = importlib.import_module(module_name)
        router = getattr(module, "router", None)
        if router is None:
            continue
        router_prefix = getattr(module, "ROUTER_PREFIX", None)
        router_tag = getattr(module, "ROUTER_TAG", None)
        include_kwargs = {
            "prefix": prefix.rstrip("/") + router_prefix if router_prefix else prefix,
            "include_in_schema": getattr(module, "INCLUDE_ROUTER_IN_SCHEMA", True),
        }
        if router_tag:
            include_kwargs["tags"] = [router_tag]
        app.include_router(router, **include_kwargs)
        logger.debug(
            "Included router from module: %s (prefix=%s, tag=%s)",
            module_name, include_kwargs["prefix"], router_tag,
        )
