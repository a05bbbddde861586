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

"""kvlogr - key/value structured logging for line-oriented sinks.

Deduplicates layered key/value pairs (context values under per-call values)
and renders them as a deterministic ``key="value"`` line, delivered through a
small logger adapter to any sink that accepts whole lines, such as a test
reporter.
"""

from __future__ import annotations

from kvlogr.exceptions import (
    ConfigReadError,
    InvalidSettingsError,
    KvlogrError,
    KvlogrValidationError,
)

from .config import LoggerSettings, load_settings
from .core.model_types import ValueKind
from .core.protocols import Sink, StructuredLogger, TextBuffer
from .logger import KVLogger, new_logger
from .serialize import (
    MISSING_VALUE,
    classify_value,
    format_value,
    kv_list_format,
    kv_list_string,
    trim_duplicates,
)

__all__ = [
    "MISSING_VALUE",
    "ConfigReadError",
    "InvalidSettingsError",
    "KVLogger",
    "KvlogrError",
    "KvlogrValidationError",
    "LoggerSettings",
    "Sink",
    "StructuredLogger",
    "TextBuffer",
    "ValueKind",
    "__version__",
    "classify_value",
    "format_value",
    "kv_list_format",
    "kv_list_string",
    "load_settings",
    "new_logger",
    "trim_duplicates",
]

__version__ = "0.1.0"
