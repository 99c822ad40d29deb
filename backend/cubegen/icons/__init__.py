from cubegen.icons.registry import (
    BASE_ICONS,
    GENERIC_ICON,
    CacheState,
    IconRegistry,
    get_icon_registry,
)

__all__ = [
    "BASE_ICONS",
    "GENERIC_ICON",
    "CacheState",
    "IconRegistry",
    "get_icon_registry",
]
