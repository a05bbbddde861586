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

"""Deduplication and rendering of alternating key/value lists.

A key/value list alternates ``key, value, key, value, ...``; an odd-length
list ends with a key whose value is missing. ``trim_duplicates`` resolves
keys across several such lists (later lists and later pairs win) and
``kv_list_format`` renders one list as `` key="value"`` text.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Final

from .quoting import format_value, safe_str

if TYPE_CHECKING:
    from collections.abc import Hashable

    from kvlogr.core.protocols import TextBuffer
    from kvlogr.core.type_aliases import KVListGroup, KVSequence

MISSING_VALUE: Final[str] = "(MISSING)"


class _SeenKeys:
    """Keys claimed during a single ``trim_duplicates`` call."""

    __slots__ = ("_hashable", "_unhashable")

    def __init__(self) -> None:
        self._hashable: set[Hashable] = set()
        self._unhashable: list[object] = []

    def claim(self, key: object) -> bool:
        """Record ``key`` and return whether it had not been seen before."""
        try:
            if key in self._hashable:
                return False
            self._hashable.add(key)  # type: ignore[arg-type]
        except TypeError:
            if key in self._unhashable:
                return False
            self._unhashable.append(key)
        return True


def trim_duplicates(*kv_lists: KVSequence) -> KVListGroup:
    """Deduplicate keys across several key/value lists.

    Lists are walked last to first and pairs within each list from the end
    toward the start. The first occurrence reached claims its key, and every
    other occurrence of that key, in any list, is dropped. Surviving pairs keep
    their original order and stay in the list they came from.

    A trailing key without a value takes part by key only; if it survives it
    stays unpaired at the end of its output list.

    Args:
        *kv_lists: Key/value lists in increasing order of precedence.

    Returns:
        One new list per input list, holding the pairs that list keeps.

    Example:
        >>> trim_duplicates(["pod", "nginx", "ns", "kube"], ["pod", "busybox"])
        [['ns', 'kube'], ['pod', 'busybox']]
    """
    seen = _SeenKeys()
    outs: KVListGroup = [[] for _ in kv_lists]
    for index in range(len(kv_lists) - 1, -1, -1):
        kv_list = kv_lists[index]
        size = len(kv_list)
        kept: list[int] = []
        # odd-length lists start at the trailing unpaired key
        for pos in range(size - 2 + size % 2, -1, -2):
            if seen.claim(kv_list[pos]):
                kept.append(pos)
        out = outs[index]
        for pos in reversed(kept):
            out.append(kv_list[pos])
            if pos + 1 < size:
                out.append(kv_list[pos + 1])
    return outs


def kv_list_format(buffer: TextBuffer, *keys_and_values: object) -> None:
    """Serialize all key/value pairs into ``buffer``.

    A space is written before the first pair and between each pair, so text
    rendered into an empty buffer starts with a space the caller strips.

    Args:
        buffer: Append-only text destination.
        *keys_and_values: Alternating keys and values. A trailing key without
            a value is rendered with ``MISSING_VALUE``. Keys are written with
            ``str``; a key whose ``__str__`` raises is written as a placeholder.
    """
    for index in range(0, len(keys_and_values), 2):
        key = keys_and_values[index]
        value = keys_and_values[index + 1] if index + 1 < len(keys_and_values) else MISSING_VALUE
        buffer.write(f" {safe_str(key)}={format_value(value)}")


def kv_list_string(*keys_and_values: object) -> str:
    """Render key/value pairs to a string without the leading space.

    Example:
        >>> kv_list_string("msg", "hello", "n", 5)
        'msg="hello" n=5'
    """
    buffer = io.StringIO()
    kv_list_format(buffer, *keys_and_values)
    return buffer.getvalue()[1:]


__all__ = ["MISSING_VALUE", "kv_list_format", "kv_list_string", "trim_duplicates"]
