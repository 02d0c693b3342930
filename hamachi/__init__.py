"""
Hamachi

Type-checked models for JSON data.
"""

import importlib.metadata

__version__ = importlib.metadata.version("hamachi")

from .exceptions import (
    DeclarationError,
    FrozenInstanceError,
    HamachiError,
    MalformedSnapshotError,
    TypeMismatch,
)
from .fields import (
    Boolean,
    EnumField,
    Field,
    Interval,
    ListField,
    NullableField,
    PositiveField,
    PositiveOrZeroField,
    Symbol,
    Timestamp,
)
from .model import ConstructionOptions, Model, schema
from .registry import TypeRegistry, register_type, types
from .schema import field

__all__ = [
    # Models
    "Model",
    "ConstructionOptions",
    "schema",
    "field",
    # Field types
    "Field",
    "EnumField",
    "ListField",
    "NullableField",
    "PositiveField",
    "PositiveOrZeroField",
    "Interval",
    "Symbol",
    "Boolean",
    "Timestamp",
    # Registry
    "TypeRegistry",
    "types",
    "register_type",
    # Errors
    "HamachiError",
    "DeclarationError",
    "TypeMismatch",
    "FrozenInstanceError",
    "MalformedSnapshotError",
]
