"""Schemas for query parameters and template metadata.

A schema is anything with a ``parse(value)`` method that returns the
validated (and defaulted) value or raises ``ValidationError``.
``parse(None)`` applies the schema's defaults.

The usual way to declare one is a frozen dataclass, the same shape used
for typed request data::

    @dataclass(frozen=True, slots=True)
    class Search:
        query: str = "hello world"
        page: int = 1

    paths.add("/search", search_params=Search)

Dataclass types are wrapped in ``DataclassSchema`` automatically.

Supported field types: ``str``, ``int``, ``float``, ``bool``,
``list[X]``, ``dict``, ``X | None``, ``Literal[...]``, ``Any`` and
nested dataclasses.
"""

import dataclasses
import types
from collections.abc import Mapping
from typing import (
    Any,
    Literal,
    Protocol,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    runtime_checkable,
)

from safepaths.errors import ConfigurationError, ValidationError

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


@runtime_checkable
class Schema(Protocol):
    """Validates and coerces a value, applying defaults for ``None``."""

    def parse(self, value: Any) -> Any: ...


class DataclassSchema[T]:
    """Adapts a dataclass type to the ``Schema`` protocol.

    - unknown keys are ignored
    - missing keys fall back to the field default
    - missing required fields and unconvertible values raise
      ``ValidationError`` listing every failing field
    """

    __slots__ = ("_hints", "cls")

    def __init__(self, cls: type[T]) -> None:
        if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
            msg = f"{cls!r} is not a dataclass type"
            raise ConfigurationError(msg)
        self.cls = cls
        self._hints = get_type_hints(cls)

    def __repr__(self) -> str:
        return f"DataclassSchema({self.cls.__name__})"

    def parse(self, value: Any) -> T:
        if isinstance(value, self.cls):
            return value
        if value is None:
            value = {}
        if not isinstance(value, Mapping):
            raise ValidationError(
                {"": [f"Expected an object, got {type(value).__name__}"]},
                schema=self.cls.__name__,
            )

        kwargs: dict[str, Any] = {}
        errors: dict[str, list[str]] = {}

        for f in dataclasses.fields(self.cls):
            if not f.init:
                continue
            if f.name not in value:
                if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                    errors[f.name] = ["Field required"]
                continue
            try:
                kwargs[f.name] = _convert(value[f.name], self._hints.get(f.name, Any))
            except ValidationError as exc:
                for sub, messages in exc.errors.items():
                    key = f"{f.name}.{sub}" if sub else f.name
                    errors.setdefault(key, []).extend(messages)

        if errors:
            raise ValidationError(errors, schema=self.cls.__name__)
        return self.cls(**kwargs)


def as_schema(obj: Any) -> Schema | None:
    """Normalise a user-supplied schema declaration.

    ``None`` passes through. Objects with a ``parse`` method are used
    as-is; dataclass types are wrapped in ``DataclassSchema``.
    """
    if obj is None:
        return None
    if isinstance(obj, type) and dataclasses.is_dataclass(obj):
        return DataclassSchema(obj)
    if callable(getattr(obj, "parse", None)):
        return obj
    msg = f"{obj!r} is not a schema: expected a dataclass type or an object with a parse() method"
    raise ConfigurationError(msg)


def to_mapping(value: Any) -> dict[str, Any] | None:
    """Turn a schema's output into a plain dict, ready for serialisation."""
    if value is None:
        return None
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, Mapping):
        return dict(value)
    msg = f"Expected a mapping or dataclass instance, got {type(value).__name__}"
    raise TypeError(msg)


def _fail(message: str) -> ValidationError:
    return ValidationError({"": [message]})


def _convert(value: Any, annotation: Any) -> Any:
    """Convert *value* to *annotation*, raising ``ValidationError`` on failure."""
    if annotation is Any:
        return value

    origin = get_origin(annotation)

    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        if value is None and type(None) in args:
            return None
        non_none = [a for a in args if a is not type(None)]
        for candidate in non_none:
            try:
                return _convert(value, candidate)
            except ValidationError:
                continue
        names = " | ".join(getattr(a, "__name__", repr(a)) for a in args)
        raise _fail(f"Expected {names}, got {value!r}")

    if origin is Literal:
        choices = get_args(annotation)
        if value in choices:
            return value
        raise _fail(f"Expected one of {', '.join(repr(c) for c in choices)}, got {value!r}")

    if origin is list or annotation is list:
        if not isinstance(value, list):
            raise _fail(f"Expected a list, got {type(value).__name__}")
        args = get_args(annotation)
        if not args:
            return list(value)
        items = []
        errors: dict[str, list[str]] = {}
        for index, item in enumerate(value):
            try:
                items.append(_convert(item, args[0]))
            except ValidationError as exc:
                errors[str(index)] = [m for messages in exc.errors.values() for m in messages]
        if errors:
            raise ValidationError(errors)
        return items

    if origin is dict or annotation is dict:
        if not isinstance(value, Mapping):
            raise _fail(f"Expected an object, got {type(value).__name__}")
        return dict(value)

    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        return DataclassSchema(annotation).parse(value)

    if annotation is str:
        if isinstance(value, str):
            return value
        # decode_value only yields numbers written canonically, so str() gives back the query text
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        raise _fail(f"Expected str, got {value!r}")

    if annotation is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in _TRUE | _FALSE:
            return value.lower() in _TRUE
        raise _fail(f"Expected bool, got {value!r}")

    if annotation is int:
        if isinstance(value, bool):
            raise _fail(f"Expected int, got {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                pass
        raise _fail(f"Expected int, got {value!r}")

    if annotation is float:
        if isinstance(value, bool):
            raise _fail(f"Expected float, got {value!r}")
        if isinstance(value, int | float):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                pass
        raise _fail(f"Expected float, got {value!r}")

    # Unknown type: pass through unchanged
    return value
