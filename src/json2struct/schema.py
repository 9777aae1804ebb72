from __future__ import annotations

from typing import List

from pydantic import BaseModel

from json2struct.emission import render_type
from json2struct.model import TypeGraph


class FieldDTO(BaseModel):
    name: str
    json_key: str
    type: str


class StructDTO(BaseModel):
    name: str
    fields: List[FieldDTO] = []


class TypeGraphDTO(BaseModel):
    root_name: str
    root_type: str
    structs: List[StructDTO] = []


def graph_to_dto(graph: TypeGraph) -> TypeGraphDTO:
    structs = [
        StructDTO(
            name=definition.name,
            fields=[
                FieldDTO(
                    name=field.display_name,
                    json_key=field.original_key,
                    type=render_type(field.type),
                )
                for field in definition.fields
            ],
        )
        for definition in graph.registry.definitions()
    ]
    return TypeGraphDTO(
        root_name=graph.registry.root_name,
        root_type=render_type(graph.root),
        structs=structs,
    )
