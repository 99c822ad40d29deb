"""
Icon Registry - resolves DSL icon tags for renderers.

Base icons are always available. The much larger cloud catalog is imported
on first demand. A lookup never waits on a load running in another thread:
until the catalog is loaded, an unknown tag resolves to the generic icon.

The parser does not consult this registry; icon tags are free text at parse
time and are only checked when a document is rendered or validated.
"""

import importlib
import logging
import threading
from enum import Enum
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


GENERIC_ICON = "Generic"

BASE_ICONS: Dict[str, str] = {
    "Generic": "Generic component",
    "User": "User / client",
    "Api": "API endpoint",
    "Server": "Application server",
    "Database": "Database",
    "LoadBalancer": "Load balancer",
    "Lock": "Authentication / security",
    "Cache": "Cache",
    "Queue": "Message queue",
    "Storage": "Object storage",
    "Cloud": "Cloud",
    "Browser": "Web browser",
    "Mobile": "Mobile client",
    "Function": "Serverless function",
    "Gateway": "Gateway",
}


class CacheState(Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


def _import_cloud_catalog() -> Dict[str, str]:
    module = importlib.import_module("cubegen.icons.cloud_library")
    return dict(module.CLOUD_LIBRARY_ICONS)


class IconRegistry:
    """
    Two-tier icon lookup with an explicit cache for the cloud tier.

    Usage:
        registry = IconRegistry()
        registry.resolve("Api")          # base icon, always immediate
        registry.resolve("AwsLambda")    # "Generic" until the catalog loads
        registry.preload()
        registry.resolve("AwsLambda")    # "AwsLambda"
    """

    def __init__(self, loader: Optional[Callable[[], Dict[str, str]]] = None):
        self._loader = loader or _import_cloud_catalog
        self._cloud: Dict[str, str] = {}
        self._state = CacheState.UNLOADED
        self._lock = threading.Lock()

    @property
    def state(self) -> CacheState:
        return self._state

    def preload(self) -> None:
        """Load the cloud catalog now. A failed load is not retried."""
        with self._lock:
            if self._state is not CacheState.UNLOADED:
                return
            self._state = CacheState.LOADING

        try:
            catalog = self._loader()
        except Exception as e:
            logger.warning("Failed to load cloud icon library: %s", e)
            catalog = {}

        with self._lock:
            self._cloud = catalog
            self._state = CacheState.LOADED
        logger.debug("Cloud icon library loaded with %d icons", len(catalog))

    def is_known(self, name: str) -> bool:
        if name in BASE_ICONS:
            return True
        return self._state is CacheState.LOADED and name in self._cloud

    def resolve(self, name: Optional[str], load_missing: bool = True) -> str:
        """
        Icon tag to render for *name*.

        A miss while the catalog is unloaded loads it in place. A miss while
        another caller is loading, or after loading, gives the generic icon.
        """
        if not name:
            return GENERIC_ICON
        if self.is_known(name):
            return name
        if load_missing and self._state is CacheState.UNLOADED:
            self.preload()
            if self.is_known(name):
                return name
        return GENERIC_ICON

    def names(self) -> List[str]:
        names = list(BASE_ICONS)
        if self._state is CacheState.LOADED:
            names.extend(n for n in self._cloud if n not in BASE_ICONS)
        return names


_registry: Optional[IconRegistry] = None


def get_icon_registry() -> IconRegistry:
    """Get the process-wide icon registry."""
    global _registry
    if _registry is None:
        _registry = IconRegistry()
    return _registry
