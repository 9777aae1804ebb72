from __future__ import annotations

import json
from typing import List

from json2struct.model import (
    FieldDescriptor,
    NamedStruct,
    Primitive,
    SliceOf,
    StructDefinition,
    TypeDescriptor,
    TypeGraph,
)


def render_type(descriptor: TypeDescriptor) -> str:
    depth = 0
    while isinstance(descriptor, SliceOf):
        descriptor = descriptor.element
        depth += 1
    if isinstance(descriptor, Primitive):
        name = descriptor.kind.value
    else:
        name = descriptor.name
    return "[]" * depth + name


def render_tag(original_key: str) -> str:
    tag = f"json:{json.dumps(original_key, ensure_ascii=False)}"
    if "`" in tag:
        # Raw string literals can't hold a backtick.
        return json.dumps(tag, ensure_ascii=False)
    return f"`{tag}`"


def render_field(field: FieldDescriptor, indent: str) -> str:
    return (
        f"{indent}{field.display_name} {render_type(field.type)} "
        f"{render_tag(field.original_key)}"
    )


def render_struct_body(definition: StructDefinition, indent: str = "\t") -> str:
    lines = ["struct {"]
    for field in definition.fields:
        lines.append(render_field(field, indent))
    lines.append("}")
    return "\n".join(lines)


def render(graph: TypeGraph, indent: str = "\t") -> str:
    """Render the type graph as Go declarations.

    The root declaration comes first. A root object is rendered inline since
    it is the declaration of its own name; every other registered struct
    follows once, in registration order.
    """
    registry = graph.registry
    root_name = registry.root_name
    root = graph.root
    if isinstance(root, NamedStruct) and root.name == root_name:
        root_text = render_struct_body(registry.get(root_name), indent)
    else:
        root_text = render_type(root)
    declarations: List[str] = [f"type {root_name} {root_text}"]
    for definition in registry.definitions():
        if definition.name == root_name:
            continue
        declarations.append(
            f"type {definition.name} {render_struct_body(definition, indent)}"
        )
    return "\n\n".join(declarations)
