from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Union


class PrimitiveKind(str, Enum):
    STRING = "string"
    BOOL = "bool"
    INT = "int"
    FLOAT64 = "float64"
    ANY = "any"


class DedupPolicy(str, Enum):
    """How the builder decides that two objects share a declared type.

    - ``NAME``: same derived name means same type; the first shape wins.
    - ``STRUCTURAL``: same derived name and same shape; a differing shape gets
      a suffixed name of its own.
    """

    NAME = "name"
    STRUCTURAL = "structural"


@dataclass(frozen=True)
class Primitive:
    kind: PrimitiveKind


@dataclass(frozen=True)
class SliceOf:
    element: "TypeDescriptor"


@dataclass(frozen=True)
class NamedStruct:
    # Weak reference: the field list lives in the registry under this name.
    name: str


TypeDescriptor = Union[Primitive, SliceOf, NamedStruct]

ANY = Primitive(PrimitiveKind.ANY)
BOOL = Primitive(PrimitiveKind.BOOL)
STRING = Primitive(PrimitiveKind.STRING)
INT = Primitive(PrimitiveKind.INT)
FLOAT64 = Primitive(PrimitiveKind.FLOAT64)


@dataclass(frozen=True)
class FieldDescriptor:
    original_key: str
    display_name: str
    type: TypeDescriptor


# Interned structural signature, see classify.ShapeTable. -1 means unknown.
Shape = int


@dataclass(frozen=True)
class StructDefinition:
    name: str
    fields: List[FieldDescriptor] = field(default_factory=list)
    shape: Shape = -1


@dataclass
class TypeRegistry:
    """Named struct definitions discovered during one transform call.

    Insertion order is registration order. A name is reserved (mapped to
    ``None``) while its fields are still being built.
    """

    root_name: str
    structs: Dict[str, StructDefinition | None] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.structs

    def reserve(self, name: str) -> None:
        self.structs[name] = None

    def register(self, definition: StructDefinition) -> None:
        self.structs[definition.name] = definition

    def is_building(self, name: str) -> bool:
        return name in self.structs and self.structs[name] is None

    def get(self, name: str) -> StructDefinition | None:
        return self.structs.get(name)

    def definitions(self) -> List[StructDefinition]:
        return [d for d in self.structs.values() if d is not None]


@dataclass(frozen=True)
class TypeGraph:
    root: TypeDescriptor
    registry: TypeRegistry


@dataclass(frozen=True)
class TransformConfig:
    root_name: str = "AutoGenerated"
    dedup: DedupPolicy = DedupPolicy.NAME
    item_suffix: str = "Item"
    indent: str = "\t"
    field_sentinel: str = "NotNamedField"
    type_sentinel: str = "AnonymousStruct"
