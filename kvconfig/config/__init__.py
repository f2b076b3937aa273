"""Configuration store, parsing and defaulted options."""

from .configurable import ConfigOption, ConfigurableObject, resolve_option
from .conversion import from_string, to_string, zero_value
from .loader import load_config, load_settings
from .parser import ParsedLine, can_round_trip, parse_line
from .settings import Settings
from .store import Config, ReadResult, SkippedLine, WriteResult

__all__ = [
    "Config",
    "ConfigOption",
    "ConfigurableObject",
    "ParsedLine",
    "ReadResult",
    "Settings",
    "SkippedLine",
    "WriteResult",
    "can_round_trip",
    "from_string",
    "load_config",
    "load_settings",
    "parse_line",
    "resolve_option",
    "to_string",
    "zero_value",
]
