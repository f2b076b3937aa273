"""String <-> typed value conversion.

Values live in the store as strings. Reading converts with a pydantic
``TypeAdapter`` in lax mode, so ``"8080"`` becomes ``8080`` for ``int`` and
``"1"``/``"true"`` become ``True`` for ``bool``. Types pydantic has no schema
for are built by calling ``type_(text)``. Text that does not convert yields
the type's zero value instead of an error.
"""

from functools import lru_cache
from typing import Any, Optional, Type, TypeVar

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from kvconfig.exceptions import ConversionError


T = TypeVar("T")

MISSING: Any = object()


@lru_cache(maxsize=None)
def _adapter(type_: Any) -> Optional[TypeAdapter]:
    try:
        return TypeAdapter(type_)
    except PydanticSchemaGenerationError:
        return None


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", repr(type_))


def zero_value(type_: Type[T]) -> Optional[T]:
    """Return the value a failed conversion to ``type_`` falls back to."""
    try:
        return type_()
    except TypeError:
        return None


def to_string(value: Any) -> str:
    """Render ``value`` in the form it is stored and written."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def try_from_string(text: str, type_: Type[T]) -> T:
    """Convert ``text`` to ``type_``.

    Raises:
        ConversionError: If the text does not convert
    """
    if type_ is str:
        return text  # type: ignore[return-value]

    adapter = _adapter(type_)
    if adapter is None:
        try:
            return type_(text)  # type: ignore[call-arg]
        except (TypeError, ValueError) as e:
            raise ConversionError(f"Cannot convert {text!r} to {_type_name(type_)}") from e

    try:
        return adapter.validate_python(text)
    except ValidationError as e:
        raise ConversionError(f"Cannot convert {text!r} to {_type_name(type_)}") from e


def from_string(text: str, type_: Type[T], default: Any = MISSING) -> Any:
    """Convert ``text`` to ``type_``, falling back on failure.

    Args:
        text: Stored string
        type_: Target type
        default: Returned on failure, the type's zero value when omitted
    """
    try:
        return try_from_string(text, type_)
    except ConversionError:
        return zero_value(type_) if default is MISSING else default
