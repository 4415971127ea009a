"""Column-to-field binding tables for typed record mapping.

A binding table is computed once per record type from the fields it
declares: dataclass fields, Pydantic model fields, class-level annotations
and properties that have a setter. Columns resolve to fields through their
setter key, ``"set"`` followed by the name with its first character
upper-cased. ``name`` and ``Name`` therefore both bind to a field called
``name``, while ``NAME`` does not.

Attributes a plain class only assigns inside ``__init__`` are invisible to
the table; such classes need class-level annotations.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import types
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)


def setter_key(name: str) -> str:
    """Setter key for a column or field name: ``id`` -> ``setId``."""
    return "set" + name[:1].upper() + name[1:]


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        from pydantic import BaseModel

        return isinstance(cls, type) and issubclass(cls, BaseModel)
    except ImportError:
        return False


def _runtime_types(annotation: Any) -> tuple[tuple[type, ...] | None, bool]:
    """Reduce an annotation to (accepted runtime types, accepts None).

    ``None`` as the first element means any value type is accepted.
    """
    if annotation is Any or annotation is inspect.Parameter.empty:
        return None, True

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        accepted: list[type] = []
        nullable = False
        for arg in get_args(annotation):
            if arg is _NONE_TYPE:
                nullable = True
                continue
            arg_types, arg_nullable = _runtime_types(arg)
            if arg_types is None:
                return None, True
            accepted.extend(arg_types)
            nullable = nullable or arg_nullable
        return tuple(accepted), nullable
    if origin is Annotated:
        return _runtime_types(get_args(annotation)[0])
    if origin is not None:
        # list[int] -> list; Literal[...] and friends carry no runtime class
        if isinstance(origin, type):
            return (origin,), False
        return None, True

    # int is acceptable where float is expected (numeric tower)
    if annotation is float:
        return (float, int), False
    if annotation is complex:
        return (complex, float, int), False
    if isinstance(annotation, type):
        return (annotation,), False
    # unresolved string annotations, TypeVars, NewTypes
    return None, True


def _type_hints(obj: Any) -> dict[str, Any]:
    try:
        return get_type_hints(obj)
    except (NameError, TypeError) as e:
        logger.debug(f"Cannot resolve annotations of {obj!r}, accepting any type: {e}")
        return dict(getattr(obj, "__annotations__", {}))


def _setter_annotation(fset: Any) -> Any:
    """Annotation of the value parameter of a property setter."""
    params = list(inspect.signature(fset).parameters.values())
    if len(params) < 2:
        return Any
    return _type_hints(fset).get(params[1].name, Any)


def _declared_fields(record_type: type) -> dict[str, Any]:
    """Settable field names of a record type mapped to their annotations."""
    fields: dict[str, Any] = {}

    if _is_pydantic_model(record_type):
        for name, info in record_type.model_fields.items():  # type: ignore[attr-defined]
            fields[name] = info.annotation if info.annotation is not None else Any
    elif dataclasses.is_dataclass(record_type):
        hints = _type_hints(record_type)
        for f in dataclasses.fields(record_type):
            fields[f.name] = hints.get(f.name, Any)
    else:
        for name, hint in _type_hints(record_type).items():
            if name.startswith("_") or get_origin(hint) is ClassVar:
                continue
            fields[name] = hint

    for klass in reversed(record_type.__mro__):
        for name, member in vars(klass).items():
            if not isinstance(member, property) or name.startswith("_"):
                continue
            if member.fset is None:
                fields.pop(name, None)
            else:
                fields[name] = _setter_annotation(member.fset)

    return fields


@dataclass(frozen=True)
class FieldBinding:
    """How one column value is applied to a record attribute."""

    attribute: str
    accepts: tuple[type, ...] | None  # None accepts any type
    nullable: bool

    def accepts_value(self, value: Any) -> bool:
        if value is None:
            return self.nullable
        if self.accepts is None:
            return True
        matches = [t for t in self.accepts if isinstance(value, t)]
        if isinstance(value, bool):
            # bool subclasses int; a flag is not an int or float value
            return any(t is not int for t in matches)
        return bool(matches)


@dataclass(frozen=True)
class BindingTable:
    """Static column-to-field binding table for one record type.

    Args:
        record_type: The record class the table binds to.
        bindings: Field bindings keyed by setter key.
        aliases: Field bindings keyed by exact column name; checked first.
    """

    record_type: type
    bindings: Mapping[str, FieldBinding]
    aliases: Mapping[str, FieldBinding] = dataclasses.field(default_factory=dict)

    @classmethod
    def for_type(
        cls,
        record_type: type,
        aliases: Mapping[str, str] | None = None,
    ) -> BindingTable:
        """Derive the binding table of ``record_type``.

        Args:
            record_type: The record class.
            aliases: Optional column-name to field-name mapping.

        Raises:
            ValueError: If an alias names a field the record type does not declare.
        """
        fields = _declared_fields(record_type)
        if not fields:
            logger.warning(
                f"{record_type.__name__} declares no settable fields; every column will be "
                "skipped. Annotate its attributes or use a dataclass or Pydantic model"
            )

        by_attribute: dict[str, FieldBinding] = {}
        for name, annotation in fields.items():
            accepts, nullable = _runtime_types(annotation)
            by_attribute[name] = FieldBinding(attribute=name, accepts=accepts, nullable=nullable)

        alias_bindings: dict[str, FieldBinding] = {}
        for column, attribute in (aliases or {}).items():
            if attribute not in by_attribute:
                raise ValueError(
                    f"Alias target '{attribute}' is not a settable field of "
                    f"{record_type.__name__}"
                )
            alias_bindings[column] = by_attribute[attribute]

        return cls(
            record_type=record_type,
            bindings={setter_key(name): binding for name, binding in by_attribute.items()},
            aliases=alias_bindings,
        )

    def resolve(self, column: str) -> FieldBinding | None:
        """Binding for a column name, or None when the record has no matching field."""
        if column in self.aliases:
            return self.aliases[column]
        return self.bindings.get(setter_key(column))
