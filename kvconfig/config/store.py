"""Key-value configuration store with flat-file persistence.

Features:
- String storage with typed access
- ``KEY = VALUE`` file reading and writing
- Explicit read/write results instead of raised I/O errors
- Re-entrant locking around every operation
"""

import threading

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, TypeVar, Union

import structlog

from kvconfig.exceptions import (
    ConfigFileError,
    ConfigReadError,
    ConfigWriteError,
    ConversionError,
    MissingConfigError,
)
from kvconfig.utils.constants import OUTPUT_SEPARATOR

from .conversion import from_string, to_string, try_from_string
from .parser import parse_line
from .settings import Settings


logger = structlog.get_logger()

T = TypeVar("T")
PathLike = Union[str, Path]


@dataclass(frozen=True)
class SkippedLine:
    """A line ignored while reading."""

    line_number: int
    reason: str


@dataclass
class ReadResult:
    """Outcome of reading a configuration file."""

    ok: bool
    filename: str = ""
    loaded: int = 0
    skipped: List[SkippedLine] = field(default_factory=list)
    error: Optional[ConfigFileError] = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass
class WriteResult:
    """Outcome of writing a configuration file."""

    ok: bool
    filename: str = ""
    written: int = 0
    error: Optional[ConfigFileError] = None

    def __bool__(self) -> bool:
        return self.ok


class Config:
    """Configuration store mapping keys to string values.

    Values are always stored as strings and converted on access. Reading and
    writing never raise; failures are logged and reported through the
    returned result.
    """

    def __init__(
        self,
        filename: Optional[PathLike] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or Settings()
        self.lock = threading.RLock()
        self._parameters: Dict[str, str] = {}

        if filename:
            self.read(filename)

    def get(self, key: str, type_: Type[T] = str) -> T:  # type: ignore[assignment]
        """Get ``key`` converted to ``type_``.

        A missing key reads as the empty string. Failed conversions return
        the type's zero value, so absent, unparsable and zero-valued entries
        look the same; use ``get_or_none`` or ``require`` to tell them apart.
        """
        with self.lock:
            text = self._parameters.get(key, "")
        return from_string(text, type_)

    def get_or_none(self, key: str, type_: Type[T] = str) -> Optional[T]:  # type: ignore[assignment]
        """Get ``key`` converted to ``type_``, or None if absent or unparsable."""
        with self.lock:
            if key not in self._parameters:
                return None
            text = self._parameters[key]
        return from_string(text, type_, default=None)

    def require(self, key: str, type_: Type[T] = str) -> T:  # type: ignore[assignment]
        """Get ``key`` converted to ``type_``.

        Raises:
            MissingConfigError: If the key is not in the store
            ConversionError: If the value does not convert
        """
        with self.lock:
            if key not in self._parameters:
                raise MissingConfigError(f"Missing configuration key: {key}")
            text = self._parameters[key]
        try:
            return try_from_string(text, type_)
        except ConversionError as e:
            raise ConversionError(f"{key}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        with self.lock:
            self._parameters[key] = to_string(value)

    def setdefault(self, key: str, value: Any) -> bool:
        """Store ``value`` only if ``key`` is absent.

        Returns:
            True if the value was inserted
        """
        with self.lock:
            if key in self._parameters:
                return False
            self._parameters[key] = to_string(value)
            return True

    def exists(self, key: str) -> bool:
        with self.lock:
            return key in self._parameters

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.exists(key)

    def __len__(self) -> int:
        return len(self._parameters)

    def keys(self) -> List[str]:
        with self.lock:
            return sorted(self._parameters)

    def items(self) -> List[Tuple[str, str]]:
        with self.lock:
            return sorted(self._parameters.items())

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def as_dict(self) -> Dict[str, str]:
        return dict(self.items())

    def read(self, filename: PathLike) -> ReadResult:
        """Load ``KEY = VALUE`` lines from ``filename`` into the store.

        Malformed lines are skipped and listed in the result. Later lines win
        over earlier ones with the same key. On an I/O or decoding error the
        entries read so far stay in the store.
        """
        name = str(filename)
        result = ReadResult(ok=True, filename=name)
        limit = self.settings.max_line_length
        legacy = self.settings.legacy_comment_boundary

        with self.lock:
            try:
                with open(filename, "r", encoding=self.settings.encoding) as f:
                    for line_number, raw in enumerate(f, start=1):
                        line = raw.rstrip("\r\n")
                        if len(line) > limit:
                            logger.debug(
                                "Truncating long line",
                                filename=name,
                                line=line_number,
                                length=len(line),
                            )
                            line = line[:limit]

                        parsed = parse_line(line, legacy_comment_boundary=legacy)
                        if not parsed.is_valid:
                            # Blank lines are not worth reporting
                            if line.strip():
                                result.skipped.append(
                                    SkippedLine(line_number, parsed.reason or "")
                                )
                            continue

                        self._parameters[parsed.key] = parsed.value
                        result.loaded += 1

            except (OSError, UnicodeError) as e:
                logger.error(
                    "Exception reading user configuration file",
                    filename=name,
                    error=str(e),
                )
                result.ok = False
                result.error = ConfigReadError(name, str(e))
                return result

        if result.skipped:
            logger.debug(
                "Skipped malformed configuration lines",
                filename=name,
                lines=[s.line_number for s in result.skipped],
            )
        return result

    def write(self, filename: PathLike) -> WriteResult:
        """Write the store to ``filename`` in key order, replacing its contents."""
        name = str(filename)

        with self.lock:
            try:
                with open(filename, "w", encoding=self.settings.encoding) as f:
                    f.write(self.dumps())
            except (OSError, UnicodeError) as e:
                logger.error(
                    "Exception writing user configuration file",
                    filename=name,
                    error=str(e),
                )
                return WriteResult(
                    ok=False, filename=name, error=ConfigWriteError(name, str(e))
                )

            return WriteResult(ok=True, filename=name, written=len(self._parameters))

    def dumps(self) -> str:
        """Render the store as ``KEY = VALUE`` lines in key order."""
        return "".join(
            f"{key}{OUTPUT_SEPARATOR}{value}\n" for key, value in self.items()
        )

    def __str__(self) -> str:
        return self.dumps()

    def __repr__(self) -> str:
        return f"Config({self.as_dict()!r})"
