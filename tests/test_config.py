import sys
import types
from collections.abc import Iterator

import pytest
from pydantic import ValidationError

from browser_pages.core import config
from browser_pages.core.config import (
    DEFAULT_SETUP,
    Configuration,
    ConfigurationSetup,
    default_setup,
    import_object,
    load_configuration,
    resolve_setup,
)
from browser_pages.core.errors import ConfigurationError
from browser_pages.core.settings import Settings
from browser_pages.io.playwright_driver import PlaywrightDriver
from fakes import FakeDriver

FIREFOX = FakeDriver()
CHROME = FakeDriver()

CONFIGURATION = Configuration(
    driver_factory=lambda: CHROME,
    auto_quit=True,
    setups={"firefox": ConfigurationSetup(driver_factory=lambda: FIREFOX, auto_quit=False)},
)


@pytest.fixture
def user_module() -> Iterator[types.ModuleType]:
    module = types.ModuleType("user_pages_config")
    module.configuration = CONFIGURATION
    module.build = lambda: CONFIGURATION
    module.not_a_configuration = {"auto_quit": False}
    sys.modules[module.__name__] = module
    yield module
    del sys.modules[module.__name__]


def test_explicit_configuration_with_named_setup() -> None:
    setup = resolve_setup(CONFIGURATION, name="firefox", settings=Settings(configuration=None))
    assert setup.driver_factory() is FIREFOX
    assert setup.auto_quit is False


def test_unknown_setup_name_falls_back_to_configuration_itself() -> None:
    setup = resolve_setup(CONFIGURATION, name="safari", settings=Settings(configuration=None))
    assert setup is CONFIGURATION
    assert setup.driver_factory() is CHROME


def test_setup_name_comes_from_settings() -> None:
    setup = resolve_setup(CONFIGURATION, settings=Settings(setup_name="firefox"))
    assert setup.driver_factory() is FIREFOX


def test_without_user_configuration_uses_builtin_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "default_settings", Settings(configuration=None))
    setup = resolve_setup()
    assert setup is DEFAULT_SETUP
    assert setup.auto_quit is True
    assert setup.driver_factory is config.playwright_driver_factory


def test_builtin_default_drives_with_the_given_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(PlaywrightDriver, "start", lambda self: self)
    s = Settings(configuration=None, browser_name="firefox", headless=False, slow_mo_ms=25)

    setup = resolve_setup(settings=s)
    driver = setup.driver_factory()

    assert setup.auto_quit is True
    assert isinstance(driver, PlaywrightDriver)
    assert (driver.browser_name, driver.headless, driver.slow_mo_ms) == ("firefox", False, 25)


def test_configuration_path_from_settings(user_module: types.ModuleType) -> None:
    s = Settings(configuration="user_pages_config:configuration", setup_name="firefox")
    assert resolve_setup(settings=s).driver_factory() is FIREFOX


def test_missing_configured_module_is_an_error() -> None:
    s = Settings(configuration="no_such_config_module:configuration")
    with pytest.raises(ConfigurationError) as info:
        resolve_setup(settings=s)
    assert "no_such_config_module:configuration" in str(info.value)


def test_conventional_module_is_discovered(
    user_module: types.ModuleType, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(config, "CONVENTIONAL_CONFIGURATION", "user_pages_config:configuration")
    assert resolve_setup(settings=Settings(configuration=None)) is CONFIGURATION


def test_load_configuration_accepts_factories(user_module: types.ModuleType) -> None:
    assert load_configuration("user_pages_config:build") is CONFIGURATION


def test_load_configuration_missing_module_returns_none() -> None:
    assert load_configuration("no_such_config_module:configuration") is None
    assert load_configuration("no_such_pkg.settings:configuration") is None


def test_load_configuration_rejects_wrong_types(user_module: types.ModuleType) -> None:
    with pytest.raises(ConfigurationError) as info:
        load_configuration("user_pages_config:not_a_configuration")
    assert "user_pages_config:not_a_configuration" in str(info.value)

    with pytest.raises(ConfigurationError):
        load_configuration("user_pages_config:absent")


def test_import_object_requires_module_and_attribute() -> None:
    with pytest.raises(ValueError):
        import_object("just_a_module")
    assert import_object("browser_pages.core.config:Configuration.setup") is Configuration.setup


def test_setups_are_immutable() -> None:
    with pytest.raises(ValidationError):
        DEFAULT_SETUP.auto_quit = False  # type: ignore[misc]


def test_default_setup_is_resolved_once(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    def fake_resolve() -> ConfigurationSetup:
        calls.append(1)
        return DEFAULT_SETUP

    monkeypatch.setattr(config, "resolve_setup", fake_resolve)
    assert default_setup() is default_setup()
    assert calls == [1]
