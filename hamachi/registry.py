"""
Registry of named field type constructors.

Declarations build composite field types by name::

    from hamachi import types

    tags = field(types.list(str), empty=False)
    nickname = field(types.nullable(str))
    gender = field(types.enum("male", "female"))

Additional constructors are registered without touching this module::

    register_type("odd", OddNumber)
    lucky = field(types.odd(int))
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from .exceptions import DeclarationError
from .fields import (
    EnumField,
    Field,
    ListField,
    NullableField,
    PositiveField,
    PositiveOrZeroField,
)

logger = logging.getLogger(__name__)

FieldFactory = Callable[..., Field]


class TypeRegistry:
    """Maps short names to field type constructors."""

    def __init__(self) -> None:
        self._factories: Dict[str, FieldFactory] = {}

    def register_type(
        self, name: str, factory: FieldFactory, replace: bool = False
    ) -> FieldFactory:
        """
        Register ``factory`` under ``name``.

        Args:
            name: Identifier used at declaration sites (``types.<name>(...)``)
            factory: Callable returning a ``Field``, typically a Field subclass
            replace: Allow overriding an existing registration

        Raises:
            DeclarationError: If the name is not an identifier, or is already
                registered and ``replace`` is false
        """
        if not name.isidentifier() or name.startswith("_"):
            raise DeclarationError(f"type name {name!r} must be a public identifier")
        if hasattr(type(self), name):
            raise DeclarationError(f"type name {name!r} is reserved by the registry")
        if name in self._factories and not replace:
            raise DeclarationError(f"type {name!r} already registered")
        if not callable(factory):
            raise DeclarationError(f"factory for type {name!r} must be callable")
        self._factories[name] = factory
        logger.debug("Registered field type %s -> %r", name, factory)
        return factory

    def create(self, name: str, *args: Any, **kwargs: Any) -> Field:
        try:
            factory = self._factories[name]
        except KeyError:
            raise AttributeError(f"no field type registered as {name!r}") from None
        return factory(*args, **kwargs)

    def names(self) -> List[str]:
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __getattr__(self, name: str) -> FieldFactory:
        if name.startswith("_"):
            raise AttributeError(name)
        if name not in self._factories:
            raise AttributeError(f"no field type registered as {name!r}")

        def construct(*args: Any, **kwargs: Any) -> Field:
            return self.create(name, *args, **kwargs)

        construct.__name__ = name
        return construct

    def __repr__(self) -> str:
        return f"TypeRegistry({', '.join(self._factories)})"


types = TypeRegistry()
types.register_type("list", ListField)
types.register_type("nullable", NullableField)
types.register_type("enum", EnumField)
types.register_type("positive", PositiveField)
types.register_type("positive_or_zero", PositiveOrZeroField)


def register_type(name: str, factory: FieldFactory, replace: bool = False) -> FieldFactory:
    """Register a field type constructor on the default registry."""
    return types.register_type(name, factory, replace=replace)
