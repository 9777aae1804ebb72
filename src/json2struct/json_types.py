"""JSON value types accepted by the inference engine.

They mirror what ``json.loads`` produces, so a decoded document reaches the
builder unchanged. Containers are the only values that can carry a struct.
"""

from __future__ import annotations

from typing import TypeAlias


JSONNumber: TypeAlias = int | float
JSONScalar: TypeAlias = JSONNumber | str | bool | None
JSONArray: TypeAlias = list["JSONValue"]
JSONObject: TypeAlias = dict[str, "JSONValue"]
JSONValue: TypeAlias = JSONScalar | JSONArray | JSONObject
JSONContainer: TypeAlias = JSONObject | JSONArray
