"""
Field declaration for model classes.

Fields are declared in the class body and collected when the class is
created::

    class Person(Model):
        name = field(str)
        gender = field(types.enum("male", "female"))
        age = field(Interval(1, 100))

Each declared field is replaced by a ``FieldAccessor`` whose setter always
validates the new value. Once the class body has been processed the schema is
finalized and ``Person.fields`` becomes a read-only ordered mapping.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping

from .exceptions import DeclarationError
from .fields import Field, as_field

logger = logging.getLogger(__name__)

FIELD_OPTIONS = frozenset({"empty"})

_MISSING = object()


def field(type: Any, **options: Any) -> Field:
    """
    Build the field type for a declaration.

    Raw classes and shapes are wrapped as primitive fields. Options are applied
    to a copy of an existing field type, so shared constants such as
    ``Boolean`` are never modified.

    Args:
        type: A Field instance, or a class or shape to wrap
        **options: ``empty`` (list fields only) allows or rejects empty lists

    Raises:
        DeclarationError: On unknown options
    """
    unknown = set(options) - FIELD_OPTIONS
    if unknown:
        raise DeclarationError(f"unknown field option(s): {', '.join(sorted(unknown))}")
    declared = as_field(type)
    if options:
        if declared is type:
            declared = declared.copy()
        declared = declared.initialize_options(options)
    return declared


class FieldAccessor:
    """Read and validated write access to one declared field."""

    def __init__(self, name: str):
        self.name = name

    def __get__(self, instance: Any, owner: Any = None) -> Any:
        if instance is None:
            return owner.fields[self.name]
        return instance._data.get(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        instance.set(self.name, value)

    def __repr__(self) -> str:
        return f"FieldAccessor({self.name!r})"


def declare_field(owner: type, name: str, type: Any, **options: Any) -> Field:
    """
    Declare field ``name`` on the model class ``owner``.

    Called by ``collect_fields`` while a model class is being created; once the
    class is finalized no further fields can be declared.

    Raises:
        DeclarationError: If ``owner`` is finalized, ``name`` is not a public
            identifier, or an attribute called ``name`` already exists on
            ``owner`` or its bases
    """
    fields = vars(owner).get("fields")
    if not isinstance(fields, dict):
        raise DeclarationError(
            f"cannot declare field {name!r}: {owner.__name__} is already finalized"
        )
    if not name.isidentifier() or name.startswith("_"):
        raise DeclarationError(f"field name {name!r} must be a public identifier")
    if _already_defined(owner, name, type):
        raise DeclarationError(f"attribute {name!r} already defined on {owner.__name__}")

    declared = field(type, **options)
    fields[name] = declared
    setattr(owner, name, FieldAccessor(name))
    logger.debug("Declared field %s.%s: %s", owner.__name__, name, declared)
    return declared


def collect_fields(owner: type) -> None:
    """Declare every field type found in ``owner``'s body, then finalize it."""
    body = [(name, value) for name, value in vars(owner).items() if isinstance(value, Field)]
    owner.fields = dict(super(owner, owner).fields)
    for name, value in body:
        declare_field(owner, name, value)
    owner.fields = MappingProxyType(owner.fields)


def describe_schema(fields: Mapping[str, Field]) -> str:
    return f"schema({','.join(f'{name}:{type.describe()}' for name, type in fields.items())})"


def _already_defined(owner: type, name: str, candidate: Any) -> bool:
    own = vars(owner).get(name, _MISSING)
    if own is not _MISSING and own is not candidate:
        return True
    return any(name in vars(base) for base in owner.__mro__[1:])
