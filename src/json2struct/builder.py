from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from loguru import logger

from json2struct.classify import ShapeTable, classify, is_object, wrap_slices
from json2struct.json_types import JSONObject, JSONValue
from json2struct.model import (
    DedupPolicy,
    FieldDescriptor,
    NamedStruct,
    Shape,
    StructDefinition,
    TransformConfig,
    TypeDescriptor,
    TypeRegistry,
)
from json2struct.naming import next_free_name, to_display_name, to_type_name


@dataclass
class _Frame:
    """An object whose struct is reserved but whose fields are not all built."""

    name: str
    value: JSONObject
    shape: Shape
    keys: List[str]
    slice_depth: int = 0
    index: int = 0
    fields: List[FieldDescriptor] = field(default_factory=list)
    keys_by_display: Dict[str, str] = field(default_factory=dict)
    # Field of the enclosing frame that receives this struct once it is done.
    parent_field: Tuple[str, str] | None = None

    def reference(self) -> TypeDescriptor:
        return wrap_slices(NamedStruct(self.name), self.slice_depth)


@dataclass
class TypeGraphBuilder:
    """Walks a decoded JSON value and registers one struct per object type.

    The registry belongs to a single transform call; build a new builder (and
    registry) for every document. The walk keeps its own stack, so nesting
    depth is bounded by memory rather than by the interpreter's recursion
    limit.
    """

    registry: TypeRegistry
    config: TransformConfig = field(default_factory=TransformConfig)
    _shapes: ShapeTable = field(default_factory=ShapeTable, init=False, repr=False)

    def build_root(self, value: JSONValue) -> TypeDescriptor:
        root_name = self.registry.root_name
        # Reserved up front so no nested type can claim the root's name.
        self.registry.reserve(root_name)
        if is_object(value):
            self._run(self._open(root_name, value, self._shapes.shape_of(value)))
            return NamedStruct(root_name)
        return self.build(root_name, value)

    def build(self, candidate_name: str, value: JSONValue) -> TypeDescriptor:
        resolved = self._resolve(candidate_name, value)
        if isinstance(resolved, _Frame):
            self._run(resolved)
            return resolved.reference()
        return resolved

    def _resolve(self, candidate_name: str, value: JSONValue) -> TypeDescriptor | _Frame:
        """Type ``value`` if that needs no new struct, else open a frame for it."""
        depth = 0
        while isinstance(value, list) and value:
            candidate_name += self.config.item_suffix
            value = value[0]
            depth += 1
        if not is_object(value):
            return wrap_slices(classify(value), depth)
        shape = self._shapes.shape_of(value)
        base_name = to_type_name(candidate_name, self.config.type_sentinel)
        name = self._resolve_name(base_name, shape)
        existing = self.registry.get(name)
        if existing is None:
            return self._open(name, value, shape, depth)
        if existing.shape != shape:
            logger.warning(
                f"Object shape for {name} differs from the first occurrence; "
                "reusing the first definition"
            )
        else:
            logger.debug(f"Reusing struct {name}")
        return wrap_slices(NamedStruct(name), depth)

    def _resolve_name(self, base_name: str, shape: Shape) -> str:
        # An ancestor still being built can't be referenced: the Go type
        # would contain itself.
        if self.config.dedup is DedupPolicy.STRUCTURAL:
            rejected = [
                name
                for name in self.registry.structs
                if self.registry.is_building(name)
                or self.registry.get(name).shape != shape
            ]
        else:
            rejected = [
                name
                for name in self.registry.structs
                if self.registry.is_building(name)
            ]
        return next_free_name(base_name, rejected)

    def _open(
        self, name: str, value: JSONObject, shape: Shape, slice_depth: int = 0
    ) -> _Frame:
        self.registry.reserve(name)
        return _Frame(
            name=name,
            value=value,
            shape=shape,
            keys=sorted(value),
            slice_depth=slice_depth,
        )

    def _run(self, frame: _Frame) -> None:
        stack = [frame]
        while stack:
            top = stack[-1]
            if top.index == len(top.keys):
                stack.pop()
                self._close(top)
                if stack:
                    original_key, display_name = top.parent_field
                    stack[-1].fields.append(
                        FieldDescriptor(original_key, display_name, top.reference())
                    )
                continue
            key = top.keys[top.index]
            top.index += 1
            original_key, display_name = self._field_names(top, key)
            resolved = self._resolve(display_name, top.value[key])
            if isinstance(resolved, _Frame):
                resolved.parent_field = (original_key, display_name)
                stack.append(resolved)
            else:
                top.fields.append(FieldDescriptor(original_key, display_name, resolved))

    def _close(self, frame: _Frame) -> None:
        self.registry.register(
            StructDefinition(name=frame.name, fields=frame.fields, shape=frame.shape)
        )
        logger.debug(f"Registered struct {frame.name} with {len(frame.fields)} field(s)")

    def _field_names(self, frame: _Frame, key: str) -> Tuple[str, str]:
        display_name = to_display_name(key)
        original_key = key
        if not display_name:
            display_name = self.config.field_sentinel
            # Empty and underscore-only keys are tagged with the sentinel too.
            if not key.replace("_", ""):
                original_key = self.config.field_sentinel
        if display_name in frame.keys_by_display:
            logger.warning(
                f"JSON keys {frame.keys_by_display[display_name]!r} and {key!r} "
                f"both map to field {display_name}"
            )
        else:
            frame.keys_by_display[display_name] = key
        return original_key, display_name
