"""
Driver profiles and their resolution.

A `ConfigurationSetup` says how to obtain a driver and whether `drive()`
quits it on exit. A `Configuration` is a setup that also carries named
profiles; the active profile is chosen by `Settings.setup_name`.

Resolution order (see `resolve_setup`):
  1) a configuration passed explicitly (tests, embedding code)
  2) the object at `Settings.configuration` ("module:attribute")
  3) the conventional `browser_pages_config:configuration`, if importable
  4) the built-in default (Playwright from those settings, auto quit)
"""
# @file purpose: Resolve driver factory + auto-quit profiles.

from __future__ import annotations

import functools
import importlib
import logging
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..io.driver import BrowserDriver
from ..io.playwright_driver import PlaywrightDriver
from .errors import ConfigurationError
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

CONVENTIONAL_CONFIGURATION = "browser_pages_config:configuration"

DriverFactory = Callable[[], BrowserDriver]


def playwright_driver_factory(settings: Optional[Settings] = None) -> BrowserDriver:
    """Built-in factory: a started PlaywrightDriver configured from settings."""
    return PlaywrightDriver.from_settings(settings or default_settings).start()


class ConfigurationSetup(BaseModel):
    """One profile: where drivers come from and who quits them."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    driver_factory: DriverFactory = playwright_driver_factory
    auto_quit: bool = True


class Configuration(ConfigurationSetup):
    """A default setup plus named alternatives."""

    setups: Dict[str, ConfigurationSetup] = Field(default_factory=dict)

    def setup(self, name: str) -> ConfigurationSetup:
        """Named profile, or this configuration itself when none matches."""
        return self.setups.get(name, self)


DEFAULT_SETUP = ConfigurationSetup()


def import_object(path: str) -> Any:
    """Import `package.module:attribute` (attribute may be dotted)."""
    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"expected 'module:attribute', got {path!r}")
    obj: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        obj = getattr(obj, part)
    return obj


def load_configuration(path: str) -> Optional[Configuration]:
    """
    Load a user configuration from an import path.
    Returns None when the module does not exist; a found object that is not a
    Configuration (or a zero-arg callable producing one) is an error.
    """
    module_name = path.partition(":")[0]
    try:
        obj = import_object(path)
    except ModuleNotFoundError as e:
        # only a missing *configuration* module means "no user configuration"
        if e.name is None or not (module_name + ".").startswith(e.name + "."):
            raise
        logger.debug("no configuration module %r", module_name)
        return None
    except AttributeError as e:
        raise ConfigurationError(
            "configuration attribute not found", details={"path": path}
        ) from e

    if not isinstance(obj, Configuration) and callable(obj):
        obj = obj()
    if not isinstance(obj, Configuration):
        raise ConfigurationError(
            "configuration must be a Configuration instance",
            details={"path": path, "type": type(obj).__name__},
        )
    return obj


def resolve_setup(
    configuration: Optional[Configuration] = None,
    *,
    name: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> ConfigurationSetup:
    """Pick the active profile; deterministic for the same inputs."""
    settings = settings or default_settings
    name = name or settings.setup_name

    if configuration is None and settings.configuration:
        configuration = load_configuration(settings.configuration)
        if configuration is None:
            raise ConfigurationError(
                "configuration module not found", details={"path": settings.configuration}
            )
    if configuration is None:
        configuration = load_configuration(CONVENTIONAL_CONFIGURATION)
    if configuration is None:
        logger.debug("no user configuration found; using built-in default")
        if settings is default_settings:
            return DEFAULT_SETUP
        return ConfigurationSetup(
            driver_factory=functools.partial(playwright_driver_factory, settings)
        )

    setup = configuration.setup(name)
    logger.debug("resolved setup %r (auto_quit=%s)", name, setup.auto_quit)
    return setup


@functools.lru_cache(maxsize=None)
def default_setup() -> ConfigurationSetup:
    """Process-wide resolution used by `drive()` when no setup is given."""
    return resolve_setup()
