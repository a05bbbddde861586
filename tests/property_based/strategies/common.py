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

"""Reusable Hypothesis strategies for property-based tests."""

from __future__ import annotations

from hypothesis import strategies as st

__all__ = ["kv_list_groups", "kv_lists", "log_values"]

_KEYS = st.sampled_from(["a", "b", "c", "d", "pod", "ns", "err"])


def log_values() -> st.SearchStrategy[object]:
    """Return a strategy emitting values of every rendering kind."""
    return st.one_of(
        st.text(max_size=8),
        st.binary(max_size=8),
        st.integers(),
        st.floats(allow_nan=False),
        st.booleans(),
        st.none(),
        st.lists(st.integers(), max_size=3),
    )


@st.composite
def kv_lists(draw: st.DrawFn, max_pairs: int = 6) -> list[object]:
    """Return alternating key/value lists, sometimes ending in an unpaired key.

    Args:
        draw: Hypothesis draw function.
        max_pairs: Maximum number of key/value pairs.

    Returns:
        Flat key/value list drawn from a small key alphabet so duplicates are common.
    """
    pairs = draw(st.lists(st.tuples(_KEYS, st.integers(0, 99)), max_size=max_pairs))
    flat: list[object] = [item for pair in pairs for item in pair]
    if draw(st.booleans()):
        flat.append(draw(_KEYS))
    return flat


def kv_list_groups(max_lists: int = 4) -> st.SearchStrategy[list[list[object]]]:
    """Return groups of key/value lists in increasing precedence order."""
    return st.lists(kv_lists(), max_size=max_lists)
