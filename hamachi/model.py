"""
Models: type-checked records backed by an ordered key-value store.

A model class declares its fields; a model instance holds the current value
of each field plus, by default, any undeclared keys of the snapshot it was
built from. Example usage::

    class Person(Model):
        name = field(str)
        gender = field(types.enum("male", "female"))
        age = field(Interval(1, 100))

    anna = Person({"name": "Anna", "gender": "female", "age": 29})
    anna = Person.parse('{"name":"Anna","gender":"female","age":29}')
    anna.to_json()  # '{"name":"Anna","gender":"female","age":29}'

Construction validates every field and fails on the first invalid one.
``is_valid`` and ``error_messages`` give a non-raising view of the same
checks, for form-like use where all errors should be shown at once.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict

from . import codec
from .config import get_settings
from .exceptions import FrozenInstanceError, TypeMismatch
from .fields import Field, Symbol, same_value
from .registry import FieldFactory, register_type
from .schema import collect_fields, describe_schema, field

logger = logging.getLogger(__name__)


class ConstructionOptions(BaseModel):
    """Options controlling how a model instance is built."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    include_unknown_fields: bool = True
    check_types: bool = True
    freeze: bool = False

    @classmethod
    def resolve(
        cls,
        options: Union["ConstructionOptions", Mapping[str, Any], None] = None,
        **overrides: Any,
    ) -> "ConstructionOptions":
        """
        Merge settings defaults, ``options`` and keyword overrides.

        Unknown option names are rejected by validation.
        """
        if isinstance(options, cls) and not overrides:
            return options
        values = get_settings().construction_defaults()
        if isinstance(options, cls):
            values.update(options.model_dump())
        elif options is not None:
            values.update(options)
        values.update(overrides)
        return cls(**values)


class Model:
    """
    Base class for models.

    Instances are keyed containers: they support ``m[key]``, ``key in m``,
    iteration over keys, ``len`` and ``del``. Equality compares the full
    key-value contents, so a model equals a plain dict holding the same items.
    Item assignment writes without validation, while field attributes and
    ``set`` always validate.

    Apart from the model API below, no named methods are defined on the class,
    so fields such as ``items``, ``keys`` or ``values`` can be declared freely.
    """

    fields: ClassVar[Mapping[str, Field]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        collect_fields(cls)

    def __init__(
        self,
        snapshot: Optional[Mapping[str, Any]] = None,
        options: Union[ConstructionOptions, Mapping[str, Any], None] = None,
        **overrides: Any,
    ):
        opts = ConstructionOptions.resolve(options, **overrides)
        if snapshot is None:
            snapshot = {}
        if not _is_tree(snapshot):
            raise TypeError(
                f"{type(self).__name__} expects a mapping, got {type(snapshot).__name__}"
            )

        data: Dict[str, Any] = {}
        for name, type_ in self.fields.items():
            value = snapshot[name] if name in snapshot else type_.default_value()
            data[name] = type_.decode(value, opts)
        if opts.include_unknown_fields:
            for key in snapshot:
                data.setdefault(key, snapshot[key])

        self._data = data
        self._frozen = False
        if opts.check_types:
            self.validate_fields()
        if opts.freeze:
            self._frozen = True

    # ------- construction ---------------------------------------------

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Any,
        options: Union[ConstructionOptions, Mapping[str, Any], None] = None,
        **overrides: Any,
    ) -> Any:
        """
        Build an instance from a decoded snapshot.

        Values that are not mappings, and instances of this class, are
        returned unchanged.
        """
        if isinstance(snapshot, cls) or not _is_tree(snapshot):
            return snapshot
        return cls(snapshot, options, **overrides)

    @classmethod
    def parse(
        cls,
        text: str,
        options: Union[ConstructionOptions, Mapping[str, Any], None] = None,
        **overrides: Any,
    ) -> Any:
        """
        Build instances from JSON text.

        A JSON array yields a list of instances in document order, any other
        document a single instance.

        Raises:
            MalformedSnapshotError: If the text is not valid JSON
            TypeMismatch: If type checking is enabled and a field is invalid
        """
        opts = ConstructionOptions.resolve(options, **overrides)
        snapshot = codec.decode(text)
        if isinstance(snapshot, list):
            logger.debug("Parsing %d %s snapshots", len(snapshot), cls.describe())
            return [cls.from_snapshot(each, opts) for each in snapshot]
        return cls.from_snapshot(snapshot, opts)

    # ------- schema ---------------------------------------------------

    @classmethod
    def schema(cls, **fields: Any) -> Type["Model"]:
        """
        Create an anonymous model class with the given fields, in order.

        The new class derives from ``Model`` directly and never inherits the
        fields of the class this is called on.
        """
        namespace: Dict[str, Any] = {name: field(kind) for name, kind in fields.items()}
        namespace["_anonymous"] = True
        namespace["__module__"] = __name__
        return type("schema", (Model,), namespace)

    @classmethod
    def describe(cls) -> str:
        """Class name, or the field signature for anonymous models."""
        if vars(cls).get("_anonymous", False):
            return describe_schema(cls.fields)
        return cls.__name__

    @classmethod
    def register_type(
        cls, name: str, factory: FieldFactory, replace: bool = False
    ) -> FieldFactory:
        return register_type(name, factory, replace=replace)

    # ------- field access ---------------------------------------------

    def set(self, name: str, value: Any) -> None:
        """
        Assign a declared field after checking the value against its type.

        Raises:
            FrozenInstanceError: If the instance is frozen
            KeyError: If ``name`` is not a declared field
            TypeMismatch: If the value does not match; nothing is stored
        """
        self._check_mutable(name)
        try:
            type_ = self.fields[name]
        except KeyError:
            raise KeyError(f"{name!r} is not a field of {self.describe()}") from None
        if not type_.matches(value):
            raise TypeMismatch(name, type_.describe(), value)
        self._data[name] = value

    def is_frozen(self) -> bool:
        return self._frozen

    # ------- validation -----------------------------------------------

    def validate_fields(self) -> None:
        """Raise TypeMismatch for the first field whose value does not match."""
        for error in self._mismatches():
            logger.debug("Validation of %s failed: %s", self.describe(), error)
            raise error

    def is_valid(self) -> bool:
        return next(self._mismatches(), None) is None

    def error_messages(self) -> List[str]:
        """Messages for every invalid field, in field order."""
        return [error.message for error in self._mismatches()]

    def field_errors(self) -> List[TypeMismatch]:
        """TypeMismatch for every invalid field, without raising."""
        return list(self._mismatches())

    def _mismatches(self) -> Iterator[TypeMismatch]:
        for name, type_ in self.fields.items():
            value = self._data.get(name)
            if not type_.matches(value):
                yield TypeMismatch(name, type_.describe(), value)

    # ------- serialization --------------------------------------------

    def prune_default_values(self) -> "Model":
        """Remove fields holding their default value, recursing into nested models."""
        for name, type_ in self.fields.items():
            if name not in self._data:
                continue
            value = self._data[name]
            if same_value(type_.default_value(), value):
                del self[name]
            elif isinstance(value, Model):
                value.prune_default_values()
            elif isinstance(value, list):
                for each in value:
                    if isinstance(each, Model):
                        each.prune_default_values()
        return self

    def to_snapshot(self) -> Dict[str, Any]:
        """Plain value tree of this instance, as it would be written to JSON."""
        return {key: _snapshot_value(value) for key, value in self._data.items()}

    def to_json(self, indent: Optional[int] = None) -> str:
        return codec.encode(self, indent=indent)

    # ------- mapping protocol -----------------------------------------

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._check_mutable(key)
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        self._check_mutable(key)
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Model):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def _check_mutable(self, key: str) -> None:
        if self._frozen:
            raise FrozenInstanceError(f"can't modify frozen {self.describe()}: {key!r}")


def schema(**fields: Any) -> Type[Model]:
    """Create an anonymous model class; see ``Model.schema``."""
    return Model.schema(**fields)


def _is_tree(value: Any) -> bool:
    return isinstance(value, (Model, Mapping))


def _snapshot_value(value: Any) -> Any:
    if isinstance(value, Model):
        return value.to_snapshot()
    if isinstance(value, Mapping):
        return {key: _snapshot_value(each) for key, each in value.items()}
    if isinstance(value, (list, tuple)):
        return [_snapshot_value(each) for each in value]
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, Symbol):
        return str(value)
    return value
