"""Simple configuration loading."""

from typing import Optional, Tuple

import structlog

from kvconfig.exceptions import ConfigurationError

from .settings import Settings
from .store import Config, ReadResult


logger = structlog.get_logger()


def load_settings() -> Settings:
    """Load library settings from environment variables.

    Returns:
        Configured Settings instance

    Raises:
        ConfigurationError: If settings are invalid
    """
    logger.debug("Loading settings from environment")

    try:
        # pydantic-settings reads KVCONFIG_* from env automatically
        settings = Settings()

        logger.debug(
            "Settings loaded successfully",
            legacy_comment_boundary=settings.legacy_comment_boundary,
            encoding=settings.encoding,
        )

        return settings

    except Exception as e:
        logger.error("Failed to load settings", error=str(e))
        raise ConfigurationError(f"Settings loading failed: {e}") from e


def load_config(
    filename: Optional[str] = None, settings: Optional[Settings] = None
) -> Tuple[Config, ReadResult]:
    """Create a store and fill it from ``filename``.

    Args:
        filename: Configuration file to read, or None for an empty store
        settings: Settings to use, loaded from the environment when omitted

    Returns:
        The store and the outcome of reading the file
    """
    if settings is None:
        settings = load_settings()

    config = Config(settings=settings)
    if filename is None:
        return config, ReadResult(ok=True)

    result = config.read(filename)
    if result.ok:
        logger.info(
            "Configuration loaded",
            filename=str(filename),
            entries=len(config),
            skipped=len(result.skipped),
        )
    return config, result
