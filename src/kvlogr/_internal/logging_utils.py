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

"""Structured logging utilities for kvlogr's own diagnostics.

Records emitted under the ``kvlogr`` logger namespace carry their structured
fields as a key/value list in the ``kv`` attribute (see ``structured_extra``).
The text formatter renders those fields with the same deduplication and
quoting rules as ``KVLogger``; the JSON formatter nests them under
``fields``.
"""

from __future__ import annotations

import io
import json
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Final, Literal, cast

from kvlogr.compat import UTC, TypedDict, override
from kvlogr.core.model_types import LogFormat
from kvlogr.json import normalize_for_json
from kvlogr.serialize import MISSING_VALUE, kv_list_format, safe_str, trim_duplicates

if TYPE_CHECKING:
    from kvlogr.core.type_aliases import KVList

ROOT_LOGGER_NAME: Final[str] = "kvlogr"
LOG_FORMAT_ENV: Final[str] = "KVLOGR_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "KVLOGR_LOG_LEVEL"
KV_RECORD_FIELD: Final[str] = "kv"

LOG_FORMATS: Final[tuple[Literal["text", "json"], ...]] = cast(
    "tuple[Literal['text', 'json'], ...]",
    tuple(format_.value for format_ in LogFormat),
)
LOG_LEVELS: Final[tuple[Literal["debug", "info", "warning", "error"], ...]] = (
    "debug",
    "info",
    "warning",
    "error",
)
CHILD_LOGGERS: Final[tuple[str, ...]] = ("kvlogr.config",)


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Resolved logging configuration for diagnostics and debugging."""

    format: LogFormat
    level: int
    level_name: str


class StructuredLogExtra(TypedDict):
    """``logging.extra`` payload carrying a key/value list."""

    kv: tuple[object, ...]


def _record_fields(record: logging.LogRecord) -> KVList:
    raw = getattr(record, KV_RECORD_FIELD, None)
    if not isinstance(raw, (list, tuple)):
        return []
    return trim_duplicates(cast("tuple[object, ...]", raw))[0]


def _fields_by_text_key(fields: KVList) -> dict[str, object]:
    by_key: dict[str, object] = {}
    for index in range(0, len(fields), 2):
        key = safe_str(fields[index])
        value = fields[index + 1] if index + 1 < len(fields) else MISSING_VALUE
        # Later pairs replace earlier ones and take their position.
        by_key.pop(key, None)
        by_key[key] = value
    return by_key


class JSONLogFormatter(logging.Formatter):
    """Render log records as structured JSON objects.

    Structured fields become a JSON object keyed by ``str(key)``. Keys that are
    distinct before stringification but share a string form, such as ``1`` and
    ``"1"``, collapse into one field; the pair written later in the list wins.
    """

    @override
    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON string.

        Args:
            record: Log record to serialise.

        Returns:
            JSON-formatted string containing standard and structured fields.
        """
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }
        fields = _record_fields(record)
        if fields:
            payload["fields"] = _fields_by_text_key(fields)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(normalize_for_json(payload), ensure_ascii=False)


class KVTextLogFormatter(logging.Formatter):
    """Readable, single-line formatter: ``[LEVEL] message key="value" ...``."""

    def __init__(self) -> None:
        super().__init__("[%(levelname)s] %(message)s")

    @override
    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        buffer = io.StringIO()
        buffer.write(self.formatMessage(record))
        kv_list_format(buffer, *_record_fields(record))
        if record.exc_info:
            buffer.write("\n")
            buffer.write(self.formatException(record.exc_info))
        return buffer.getvalue()


def _coerce_log_format(log_format: LogFormat | str) -> LogFormat:
    if isinstance(log_format, LogFormat):
        return log_format
    return LogFormat.from_str(log_format)


def _coerce_log_level(level: str | int) -> tuple[int, str]:
    if isinstance(level, int):
        return level, logging.getLevelName(level).lower()
    value = str(level).strip().lower()
    match value:
        case "debug":
            return logging.DEBUG, "debug"
        case "warning":
            return logging.WARNING, "warning"
        case "error":
            return logging.ERROR, "error"
        case _:
            return logging.INFO, "info"


def _select_format(preferred: LogFormat | str | None) -> LogFormat:
    if preferred is not None:
        return _coerce_log_format(preferred)
    env_value = os.getenv(LOG_FORMAT_ENV)
    return _coerce_log_format(env_value) if env_value else LogFormat.TEXT


def _select_level(level: str | int | None) -> tuple[int, str]:
    if level is not None:
        return _coerce_log_level(level)
    env_value = os.getenv(LOG_LEVEL_ENV)
    if env_value:
        return _coerce_log_level(env_value)
    return _coerce_log_level("info")


def _configure_handler(log_format: LogFormat) -> logging.Handler:
    handler = logging.StreamHandler()
    if log_format is LogFormat.JSON:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(KVTextLogFormatter())
    return handler


def _apply_child_levels(level: int, children: Iterable[str]) -> None:
    for child in children:
        logging.getLogger(child).setLevel(level)


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
) -> LogConfig:
    """Configure kvlogr logging according to the requested format and level.

    Args:
        log_format: Desired log output format. ``None`` falls back to the
            ``KVLOGR_LOG_FORMAT`` environment variable or ``text``.
        log_level: Preferred verbosity (string or numeric). ``None`` consults
            ``KVLOGR_LOG_LEVEL`` or defaults to ``info``.

    Returns:
        A ``LogConfig`` describing the selected formatter and resolved numeric
        log level, which is also applied to the root and child loggers.
    """
    selected_format = _select_format(log_format)
    level_value, level_name = _select_level(log_level)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(_configure_handler(selected_format))
    root_logger.setLevel(level_value)
    root_logger.propagate = False

    _apply_child_levels(level_value, CHILD_LOGGERS)
    return LogConfig(format=selected_format, level=level_value, level_name=level_name)


def structured_extra(*kv_list: object) -> StructuredLogExtra:
    """Return a ``logging.extra`` payload carrying ``kv_list``.

    Args:
        *kv_list: Alternating keys and values for the record.

    Returns:
        Mapping suitable for the ``extra`` parameter when emitting log records.
    """
    return {"kv": tuple(kv_list)}


__all__ = [
    "LOG_FORMATS",
    "LOG_LEVELS",
    "JSONLogFormatter",
    "KVTextLogFormatter",
    "LogConfig",
    "StructuredLogExtra",
    "configure_logging",
    "structured_extra",
]
