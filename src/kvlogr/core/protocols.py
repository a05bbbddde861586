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

"""Capability protocols kvlogr depends on instead of concrete types."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from kvlogr.compat import Self


@runtime_checkable
class TextBuffer(Protocol):
    """Append-only text sink such as ``io.StringIO``."""

    def write(self, s: str, /) -> object: ...


@runtime_checkable
class Sink(Protocol):
    """Line-oriented destination for rendered log records.

    ``helper`` marks the calling frame as a logging helper so that source
    attribution in the sink skips it; it is always called before ``log``.
    ``log`` receives one record as positional arguments: the level tag, an
    optional ``"prefix:"``, the message, and an optional rendered field string.
    """

    def helper(self) -> None: ...

    def log(self, *args: object) -> None: ...


@runtime_checkable
class StructuredLogger(Protocol):
    """Structured logger interface implemented by ``kvlogr.logger.KVLogger``."""

    def info(self, msg: str, *kv_list: object) -> None: ...

    def error(self, err: BaseException | None, msg: str, *kv_list: object) -> None: ...

    def enabled(self) -> bool: ...

    def v(self, level: int) -> Self: ...

    def with_name(self, name: str) -> Self: ...

    def with_values(self, *kv_list: object) -> Self: ...


__all__ = ["Sink", "StructuredLogger", "TextBuffer"]
