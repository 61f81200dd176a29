"""Row schemas: validate a row of strings and turn it into a typed record.

A schema is anything with `validate(fields) -> Valid | Invalid`. Validation
outcomes are plain values so the parser can short-circuit on the first
`Invalid` without exception-driven control flow.

pydantic does the actual coercion and checking:

- `ModelSchema` maps row positions onto a `BaseModel`'s fields in order.
- `AdapterSchema` validates the row against any type via `TypeAdapter`
  (usually a `tuple[...]`), with an optional transform on the result.
- `FunctionSchema` wraps a plain callable that raises on bad input.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

import pydantic

from lineparse.errors import SchemaLoadError

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@dataclass(frozen=True, slots=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Invalid:
    reason: str
    errors: list[dict[str, Any]] = field(default_factory=list)


@runtime_checkable
class Schema(Protocol[T_co]):
    def validate(self, fields: Sequence[str]) -> Valid[T_co] | Invalid: ...


def _errors_to_reason(err: pydantic.ValidationError) -> str:
    # One line per error: "loc: msg". Stable enough to show on the CLI.
    parts: list[str] = []
    for e in err.errors():
        loc = ".".join(str(x) for x in e.get("loc", ())) or "<row>"
        parts.append(f"{loc}: {e.get('msg', 'invalid value')}")
    return "; ".join(parts) or str(err)


def _jsonable_errors(err: pydantic.ValidationError) -> list[dict[str, Any]]:
    # `ctx` may hold exception objects; drop it and keep the useful keys.
    return [
        {k: v for k, v in e.items() if k in ("type", "loc", "msg", "input")}
        for e in err.errors()
    ]


def _input_key(name: str, info: Any) -> str:
    # Models validate by alias unless populate_by_name is set.
    alias = info.validation_alias
    if isinstance(alias, pydantic.AliasChoices):
        alias = next((c for c in alias.choices if isinstance(c, str)), None)
    if isinstance(alias, str):
        return alias
    if isinstance(info.alias, str):
        return info.alias
    return name


class ModelSchema(Generic[T]):
    """Validate a row positionally against a pydantic model.

    Field `i` of the row feeds the model's `i`-th declared field. The row must
    have exactly as many fields as the model.
    """

    def __init__(self, model: type[T]) -> None:
        if not (isinstance(model, type) and issubclass(model, pydantic.BaseModel)):
            raise TypeError(f"ModelSchema expects a pydantic BaseModel subclass, got {model!r}")
        self.model = model
        self.field_names: list[str] = list(model.model_fields)
        self._input_keys = [_input_key(n, info) for n, info in model.model_fields.items()]

    def validate(self, fields: Sequence[str]) -> Valid[T] | Invalid:
        if len(fields) != len(self.field_names):
            return Invalid(f"expected {len(self.field_names)} fields, got {len(fields)}")
        data = dict(zip(self._input_keys, fields, strict=True))
        try:
            value = self.model.model_validate(data)  # type: ignore[attr-defined]
        except pydantic.ValidationError as e:
            return Invalid(_errors_to_reason(e), _jsonable_errors(e))
        return Valid(value)

    def __repr__(self) -> str:
        return f"ModelSchema({self.model.__name__})"


class AdapterSchema(Generic[T]):
    """Validate a row as `type_` (e.g. `tuple[str, int]`), then transform it."""

    def __init__(self, type_: Any, transform: Callable[[Any], T] | None = None) -> None:
        self.type_ = type_
        self.transform = transform
        self._adapter = pydantic.TypeAdapter(type_)

    def validate(self, fields: Sequence[str]) -> Valid[T] | Invalid:
        try:
            value = self._adapter.validate_python(tuple(fields))
        except pydantic.ValidationError as e:
            return Invalid(_errors_to_reason(e), _jsonable_errors(e))
        if self.transform is not None:
            try:
                value = self.transform(value)
            except (ValueError, TypeError) as e:
                return Invalid(str(e) or type(e).__name__)
        return Valid(value)

    def __repr__(self) -> str:
        return f"AdapterSchema({self.type_!r})"


class FunctionSchema(Generic[T]):
    """Wrap `fn(fields) -> record`; ValueError/TypeError mean the row is invalid."""

    def __init__(self, fn: Callable[[list[str]], T]) -> None:
        self.fn = fn

    def validate(self, fields: Sequence[str]) -> Valid[T] | Invalid:
        try:
            return Valid(self.fn(list(fields)))
        except pydantic.ValidationError as e:
            return Invalid(_errors_to_reason(e), _jsonable_errors(e))
        except (ValueError, TypeError) as e:
            return Invalid(str(e) or type(e).__name__)

    def __repr__(self) -> str:
        name = getattr(self.fn, "__qualname__", None) or repr(self.fn)
        return f"FunctionSchema({name})"


def resolve_schema(obj: object) -> Schema[Any]:
    """Turn a schema-like object into a Schema.

    Accepts an object with `validate`, a pydantic model class, or a callable.
    """

    if isinstance(obj, type) and issubclass(obj, pydantic.BaseModel):
        return ModelSchema(obj)
    if isinstance(obj, pydantic.BaseModel):
        raise TypeError(f"Pass the model class, not an instance: {obj!r}")
    if isinstance(obj, Schema) and not isinstance(obj, type):
        return obj
    if callable(obj):
        return FunctionSchema(obj)  # type: ignore[arg-type]
    raise TypeError(f"Not a schema: {obj!r}")


def load_schema(target: str) -> Schema[Any]:
    """Import `MODULE:ATTR` and resolve it into a Schema."""

    mod_name, sep, attr = (target or "").strip().partition(":")
    mod_name, attr = mod_name.strip(), attr.strip()
    if not sep or not mod_name or not attr:
        raise SchemaLoadError(f"Schema target must look like MODULE:ATTR, got {target!r}.")

    try:
        module = importlib.import_module(mod_name)
    except Exception as e:  # noqa: BLE001 - caller needs a single error type
        raise SchemaLoadError(
            f"Cannot import schema module {mod_name!r}: {type(e).__name__}: {e}"
        ) from e

    obj: object = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise SchemaLoadError(f"{mod_name!r} has no attribute {attr!r}.") from e

    try:
        return resolve_schema(obj)
    except TypeError as e:
        raise SchemaLoadError(f"{target} is not usable as a schema: {e}") from e
