"""Custom exceptions for kvconfig."""


class KVConfigError(Exception):
    """Base exception for kvconfig."""

    pass


class ConfigurationError(KVConfigError):
    """Library settings are invalid."""

    pass


class MissingConfigError(ConfigurationError):
    """Required key is missing from the store."""

    pass


class ConfigFileError(KVConfigError):
    """Configuration file could not be processed."""

    def __init__(self, filename: str, message: str):
        super().__init__(f"{filename}: {message}")
        self.filename = filename
        self.message = message


class ConfigReadError(ConfigFileError):
    """Reading a configuration file failed."""

    pass


class ConfigWriteError(ConfigFileError):
    """Writing a configuration file failed."""

    pass


class ConversionError(KVConfigError):
    """Stored string could not be converted to the requested type."""

    pass
