# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Canonical JSON types and helpers used by kvlogr's JSON log formatter.

This module has no dependencies on logging or configuration so it can be
imported from either without cycles.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeAlias, cast

from pydantic import JsonValue

from kvlogr.core.model_types import ValueKind
from kvlogr.serialize.quoting import BytesLike, classify_value, quote_bytes, safe_repr, safe_str

__all__ = [
    "JSONValue",
    "normalize_for_json",
]

JSONValue: TypeAlias = JsonValue


def normalize_for_json(value: object) -> JSONValue:
    """Recursively convert ``value`` into a JSON-compatible structure.

    Enums become their ``.value`` payloads, mappings get string keys, and
    tuples become lists. Exceptions and objects with their own ``__str__``
    become that text. Bytes become their escaped ASCII text without the
    surrounding quotes. Anything else falls back to ``repr``.

    Args:
        value: Arbitrary logged value.

    Returns:
        A JSON-compatible structure built from ``dict``/``list``/primitives.
    """

    def _convert(obj: object) -> JSONValue:
        if isinstance(obj, Enum):
            return _convert(obj.value)
        if isinstance(obj, (str, int, float, bool)) or obj is None:
            return cast("JSONValue", obj)
        if isinstance(obj, dict):
            mapping_obj = cast("dict[object, object]", obj)
            return {str(_convert(key)): _convert(raw) for key, raw in mapping_obj.items()}
        if isinstance(obj, (list, tuple)):
            sequence_obj = cast("list[object] | tuple[object, ...]", obj)
            return [_convert(item) for item in sequence_obj]
        match classify_value(obj):
            case ValueKind.BYTES:
                return quote_bytes(cast("BytesLike", obj))[1:-1]
            case ValueKind.TEXT | ValueKind.STRINGER:
                return safe_str(obj)
            case _:
                return safe_repr(obj)

    return _convert(value)
