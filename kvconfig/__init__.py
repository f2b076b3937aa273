"""kvconfig.

A small reader/writer for flat ``KEY = VALUE`` configuration files, with typed
accessors and objects that pull their defaults from a shared configuration
store.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from kvconfig.utils.log import configure_default_logging

configure_default_logging()

from kvconfig.config.configurable import ConfigOption, ConfigurableObject, resolve_option
from kvconfig.config.store import Config, ReadResult, WriteResult

__all__ = [
    "Config",
    "ConfigOption",
    "ConfigurableObject",
    "ReadResult",
    "WriteResult",
    "resolve_option",
]
