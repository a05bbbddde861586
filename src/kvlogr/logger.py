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

"""Structured logger that renders key/value records into a line-oriented sink.

``KVLogger`` keeps a name prefix and a tuple of context values. Each call to
``info`` or ``error`` merges the context with the call's own key/value pairs
(call values win), renders them with ``kv_list_format``, and hands the record
to the sink as ``level, [prefix:], message, [fields]``. The sink can be
anything with ``helper()`` and ``log(*args)``, such as a test reporter.

Loggers are immutable: ``with_name`` and ``with_values`` return new loggers
and never change the one they were called on.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from kvlogr.config import LoggerSettings
from kvlogr.serialize import kv_list_format, trim_duplicates

if TYPE_CHECKING:
    from kvlogr.compat import Self
    from kvlogr.core.protocols import Sink
    from kvlogr.core.type_aliases import LevelTag


def new_logger(sink: Sink, settings: LoggerSettings | None = None) -> KVLogger:
    """Construct a logger writing to ``sink``.

    Args:
        sink: Destination for rendered records.
        settings: Optional settings; defaults to ``LoggerSettings()``.

    Returns:
        A logger with an empty name and no context values.
    """
    return KVLogger(sink=sink, settings=settings or LoggerSettings())


@dataclass(frozen=True, slots=True)
class KVLogger:
    """Immutable structured logger bound to a sink.

    Attributes:
        sink: Destination for rendered records.
        prefix: Hierarchical logger name; empty for the root logger.
        values: Context key/value pairs added with ``with_values``.
        settings: Name separator and error key in use.
    """

    sink: Sink
    prefix: str = ""
    values: tuple[object, ...] = ()
    settings: LoggerSettings = field(default_factory=LoggerSettings)

    def info(self, msg: str, *kv_list: object) -> None:
        """Log ``msg`` at INFO with the context values and ``kv_list``."""
        self.sink.helper()
        buffer = io.StringIO()
        self._format_fields(buffer, kv_list)
        self._log("INFO", msg, buffer)

    def error(self, err: BaseException | None, msg: str, *kv_list: object) -> None:
        """Log ``msg`` at ERROR.

        ``err`` is written first under the configured error key and is not
        deduplicated against the context or call values.
        """
        self.sink.helper()
        buffer = io.StringIO()
        kv_list_format(buffer, self.settings.error_key, err)
        self._format_fields(buffer, kv_list)
        self._log("ERROR", msg, buffer)

    def enabled(self) -> bool:
        return True

    def v(self, level: int) -> Self:  # noqa: ARG002
        """Return this logger unchanged; verbosity levels are not filtered."""
        return self

    def with_name(self, name: str) -> Self:
        """Return a logger whose name has ``name`` appended.

        Segments are joined with the configured separator (``/`` by default).
        Callers should not put the separator inside ``name``; it is not
        rejected.
        """
        prefix = f"{self.prefix}{self.settings.name_separator}{name}" if self.prefix else name
        return replace(self, prefix=prefix)

    def with_values(self, *kv_list: object) -> Self:
        """Return a logger with ``kv_list`` appended to its context values."""
        return replace(self, values=(*self.values, *kv_list))

    def _format_fields(self, buffer: io.StringIO, kv_list: tuple[object, ...]) -> None:
        context, call = trim_duplicates(self.values, kv_list)
        kv_list_format(buffer, *context)
        kv_list_format(buffer, *call)

    def _log(self, level: LevelTag, msg: str, buffer: io.StringIO) -> None:
        self.sink.helper()
        args: list[object] = [level]
        if self.prefix:
            args.append(f"{self.prefix}:")
        args.append(msg)
        rendered = buffer.getvalue()
        if rendered:
            # drop the space kv_list_format writes before the first pair
            args.append(rendered[1:])
        self.sink.log(*args)


__all__ = ["KVLogger", "new_logger"]
