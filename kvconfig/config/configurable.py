"""Objects that take their defaults from a shared configuration store.

A class declares its options once::

    class Server(ConfigurableObject):
        port = ConfigOption("PORT", 8080)

    server = Server(config)
    server.port  # value from config, or 8080 written into config

Reading an option that the attached store lacks writes the default into the
store, so a later ``Config.write`` records every option that was used.
"""

from typing import Any, Generic, Optional, Type, TypeVar

import structlog

from .store import Config


logger = structlog.get_logger()

T = TypeVar("T")


def resolve_option(
    config: Optional[Config],
    param_name: str,
    default: T,
    type_: Optional[Type[T]] = None,
) -> T:
    """Return the effective value of ``param_name``.

    Args:
        config: Store to consult, or None
        param_name: Key of the option in the store
        default: Value used, and stored, when the key is absent
        type_: Conversion target, ``type(default)`` when omitted

    Returns:
        The stored value converted to ``type_`` if present, otherwise
        ``default``
    """
    if config is None:
        return default

    target = type_ if type_ is not None else type(default)
    with config.lock:
        if config.exists(param_name):
            return config.get(param_name, target)
        config.set(param_name, default)

    logger.debug("Stored default for option", param=param_name, default=default)
    return default


class ConfigOption(Generic[T]):
    """Descriptor exposing a defaulted option on a ConfigurableObject."""

    def __init__(self, param_name: str, default: T, type_: Optional[Type[T]] = None):
        self.param_name = param_name
        self.default = default
        self.type_ = type_
        self.name = param_name.lower()

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return resolve_option(instance.config, self.param_name, self.default, self.type_)

    def __set__(self, instance: Any, value: T) -> None:
        raise AttributeError(f"Option '{self.name}' is read-only, set it on the store")

    def __repr__(self) -> str:
        return f"ConfigOption({self.param_name!r}, {self.default!r})"


class ConfigurableObject:
    """Base for objects reading their options from a borrowed Config.

    The store is never owned: callers create it, keep it alive, and may attach
    or detach it through the ``config`` property.
    """

    def __init__(self, config: Optional[Config] = None, obj_name: str = ""):
        self._config = config
        self._obj_name = obj_name

    @property
    def config(self) -> Optional[Config]:
        return self._config

    @config.setter
    def config(self, config: Optional[Config]) -> None:
        self._config = config

    @property
    def obj_name(self) -> str:
        return self._obj_name

    @classmethod
    def _option(cls, name: str) -> ConfigOption:
        option = getattr(cls, name, None)
        if not isinstance(option, ConfigOption):
            raise AttributeError(f"{cls.__name__} has no option '{name}'")
        return option

    @classmethod
    def option_param(cls, name: str) -> str:
        """Get the store key of option ``name``."""
        return cls._option(name).param_name

    @classmethod
    def option_default(cls, name: str) -> Any:
        """Get the default value of option ``name``."""
        return cls._option(name).default
