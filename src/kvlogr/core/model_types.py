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

"""Model types and enumerations for kvlogr.

- Value kinds driving the formatter's quoting policy
- Log output formats for the package's own diagnostics
"""

from __future__ import annotations

from kvlogr.compat import StrEnum


class ValueKind(StrEnum):
    """Classification of a logged value that selects how it is rendered.

    Attributes:
        TEXT: Strings and exceptions; quoted as text literals.
        BYTES: Raw byte sequences; quoted with ASCII-only escaping.
        STRINGER: Objects with their own ``__str__``; that text is quoted.
        DEFAULT: Everything else; rendered with ``repr`` and left unquoted.
    """

    TEXT = "text"
    BYTES = "bytes"
    STRINGER = "stringer"
    DEFAULT = "default"


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable ``key="value"`` text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


__all__ = ["LogFormat", "ValueKind"]
