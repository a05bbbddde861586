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

"""Key/value serialization shared by the logger adapter and log formatters."""

from __future__ import annotations

from .keyvalues import MISSING_VALUE, kv_list_format, kv_list_string, trim_duplicates
from .quoting import classify_value, format_value, quote_bytes, quote_text, safe_repr, safe_str

__all__ = [
    "MISSING_VALUE",
    "classify_value",
    "format_value",
    "kv_list_format",
    "kv_list_string",
    "quote_bytes",
    "quote_text",
    "safe_repr",
    "safe_str",
    "trim_duplicates",
]
