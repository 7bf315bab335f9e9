from __future__ import annotations

"""JSON value types accepted by the inference engine.

A document is parsed once with ``json.loads`` and handed to the converter as a
``JSONValue``; nothing in the engine mutates it.
"""

from typing import TypeAlias


JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]
JSONArray: TypeAlias = list[JSONValue]
