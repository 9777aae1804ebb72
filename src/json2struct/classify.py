from __future__ import annotations

from typing import Dict, List, Tuple

from json2struct.json_types import JSONContainer, JSONNumber, JSONValue
from json2struct.model import (
    ANY,
    BOOL,
    FLOAT64,
    INT,
    STRING,
    Shape,
    SliceOf,
    TypeDescriptor,
)


def is_object(value: JSONValue) -> bool:
    return isinstance(value, dict)


def wrap_slices(descriptor: TypeDescriptor, depth: int) -> TypeDescriptor:
    for _ in range(depth):
        descriptor = SliceOf(descriptor)
    return descriptor


def classify_number(value: JSONNumber) -> TypeDescriptor:
    if isinstance(value, int):
        return INT
    if value.is_integer():
        return INT
    return FLOAT64


def _classify_scalar(value: JSONValue) -> TypeDescriptor:
    if value is None:
        return ANY
    # bool before int: bool is an int subclass.
    if isinstance(value, bool):
        return BOOL
    if isinstance(value, (int, float)):
        return classify_number(value)
    if isinstance(value, str):
        return STRING
    return ANY


def classify(value: JSONValue) -> TypeDescriptor:
    """Map one decoded JSON value to its type.

    Objects have no pure classification (they need a name and a registry) and
    degrade to ``any`` here; route them through the builder instead. Arrays are
    typed by their first element only.
    """
    depth = 0
    while isinstance(value, list) and value:
        value = value[0]
        depth += 1
    if isinstance(value, list):
        return wrap_slices(SliceOf(ANY), depth)
    return wrap_slices(_classify_scalar(value), depth)


class ShapeTable:
    """Interns structural signatures of JSON values as small integers.

    Two values get the same shape id when they have the same keys and the
    same value types all the way down (arrays by first element). Containers
    are memoized by identity (the table keeps them alive), so a document is
    walked once no matter how often its subtrees are asked about. Ids are only
    comparable within one table.
    """

    def __init__(self) -> None:
        self._ids: Dict[Tuple[object, ...], Shape] = {}
        self._by_node: Dict[int, Tuple[JSONContainer, Shape]] = {}

    def _intern(self, key: Tuple[object, ...]) -> Shape:
        return self._ids.setdefault(key, len(self._ids))

    def _child_shape(self, child: JSONValue) -> Shape:
        if isinstance(child, (dict, list)):
            return self._by_node[id(child)][1]
        return self._intern((_classify_scalar(child).kind.value,))

    def _key(self, node: JSONContainer) -> Tuple[object, ...]:
        if isinstance(node, dict):
            return ("{}",) + tuple(
                (key, self._child_shape(node[key])) for key in sorted(node)
            )
        if not node:
            return ("[]", self._intern((ANY.kind.value,)))
        return ("[]", self._child_shape(node[0]))

    def shape_of(self, value: JSONValue) -> Shape:
        if not isinstance(value, (dict, list)):
            return self._child_shape(value)
        stack: List[Tuple[JSONContainer, bool]] = [(value, False)]
        while stack:
            node, children_done = stack.pop()
            if id(node) in self._by_node:
                continue
            if children_done:
                self._by_node[id(node)] = (node, self._intern(self._key(node)))
                continue
            stack.append((node, True))
            children = node.values() if isinstance(node, dict) else node[:1]
            for child in children:
                if isinstance(child, (dict, list)) and id(child) not in self._by_node:
                    stack.append((child, False))
        return self._by_node[id(value)][1]
