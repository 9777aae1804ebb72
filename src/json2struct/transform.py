from __future__ import annotations

import json
from dataclasses import dataclass, field

from loguru import logger

from json2struct.builder import TypeGraphBuilder
from json2struct.emission import render
from json2struct.exceptions import InvalidJSON, InvalidStructName
from json2struct.json_types import JSONValue
from json2struct.model import TransformConfig, TypeGraph, TypeRegistry
from json2struct.naming import is_identifier


def _reject_constant(name: str) -> JSONValue:
    raise ValueError(f"non-standard JSON constant {name}")


def decode(json_text: str) -> JSONValue:
    try:
        return json.loads(json_text, parse_constant=_reject_constant)
    except ValueError as exc:
        # JSONDecodeError is a ValueError subclass.
        raise InvalidJSON(exc) from exc
    except RecursionError as exc:
        raise InvalidJSON(exc) from exc


def build_graph(
    root_name: str,
    value: JSONValue,
    config: TransformConfig | None = None,
) -> TypeGraph:
    config = config or TransformConfig()
    registry = TypeRegistry(root_name=root_name)
    builder = TypeGraphBuilder(registry=registry, config=config)
    root = builder.build_root(value)
    return TypeGraph(root=root, registry=registry)


@dataclass(frozen=True)
class Transformer:
    """Turns JSON text into Go type declarations.

    Holds configuration only; each call builds its own registry, so one
    instance can serve concurrent callers.
    """

    config: TransformConfig = field(default_factory=TransformConfig)

    def graph(self, root_name: str, json_text: str) -> TypeGraph:
        if not is_identifier(root_name):
            raise InvalidStructName(root_name)
        value = decode(json_text)
        graph = build_graph(root_name, value, self.config)
        logger.debug(
            f"Inferred {len(graph.registry.definitions())} struct(s) for {root_name}"
        )
        return graph

    def transform(self, root_name: str, json_text: str) -> str:
        return render(self.graph(root_name, json_text), indent=self.config.indent)


def transform(
    root_name: str,
    json_text: str,
    config: TransformConfig | None = None,
) -> str:
    return Transformer(config or TransformConfig()).transform(root_name, json_text)
