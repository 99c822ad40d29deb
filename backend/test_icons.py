"""Tests for the icon registry and its lazily loaded cloud catalog"""

from cubegen.icons import BASE_ICONS, GENERIC_ICON, CacheState, IconRegistry


CATALOG = {"AwsLambda": "AWS Lambda", "GcpBigQuery": "BigQuery"}


class CountingLoader:
    def __init__(self, catalog=None, error=None):
        self.calls = 0
        self.catalog = catalog if catalog is not None else dict(CATALOG)
        self.error = error

    def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.catalog


def test_base_icons_need_no_load():
    loader = CountingLoader()
    registry = IconRegistry(loader=loader)
    assert registry.resolve("Api") == "Api"
    assert registry.state is CacheState.UNLOADED
    assert loader.calls == 0


def test_miss_loads_catalog_in_place():
    loader = CountingLoader()
    registry = IconRegistry(loader=loader)
    assert registry.resolve("AwsLambda") == "AwsLambda"
    assert registry.state is CacheState.LOADED
    assert registry.resolve("GcpBigQuery") == "GcpBigQuery"
    assert loader.calls == 1


def test_miss_without_loading():
    registry = IconRegistry(loader=CountingLoader())
    assert registry.resolve("AwsLambda", load_missing=False) == GENERIC_ICON
    assert registry.state is CacheState.UNLOADED


def test_unknown_and_empty_names_fall_back():
    registry = IconRegistry(loader=CountingLoader())
    assert registry.resolve("NoSuchIcon") == GENERIC_ICON
    assert registry.resolve(None) == GENERIC_ICON
    assert registry.resolve("") == GENERIC_ICON


def test_lookup_during_load_does_not_wait():
    seen = []

    def loader():
        seen.append((registry.state, registry.resolve("AwsLambda")))
        return dict(CATALOG)

    registry = IconRegistry(loader=loader)
    registry.preload()
    assert seen == [(CacheState.LOADING, GENERIC_ICON)]
    assert registry.resolve("AwsLambda") == "AwsLambda"


def test_preload_runs_once():
    loader = CountingLoader()
    registry = IconRegistry(loader=loader)
    registry.preload()
    registry.preload()
    assert loader.calls == 1


def test_failed_load_is_not_retried():
    loader = CountingLoader(error=ImportError("catalog missing"))
    registry = IconRegistry(loader=loader)
    assert registry.resolve("AwsLambda") == GENERIC_ICON
    assert registry.state is CacheState.LOADED
    assert registry.resolve("AwsS3") == GENERIC_ICON
    assert loader.calls == 1
    assert registry.names() == list(BASE_ICONS)


def test_names_include_catalog_once_loaded():
    registry = IconRegistry(loader=CountingLoader())
    assert registry.names() == list(BASE_ICONS)
    registry.preload()
    assert registry.names()[-2:] == ["AwsLambda", "GcpBigQuery"]


def test_default_loader_imports_cloud_library():
    registry = IconRegistry()
    registry.preload()
    assert registry.is_known("AwsS3")
    assert registry.is_known("GcpBigQuery")
