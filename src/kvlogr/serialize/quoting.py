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

"""Value classification and quoting rules for rendered key/value pairs.

Every value written by ``kv_list_format`` is first classified into a
``ValueKind`` and then rendered with the policy for that kind:

- ``TEXT``: ``str`` values and exceptions, written as a double-quoted literal
- ``BYTES``: ``bytes``-like values, written as an ASCII-only quoted literal
- ``STRINGER``: objects whose type defines ``__str__``, quoted like text
- ``DEFAULT``: anything else, written with ``repr`` and no quotes

Quoted literals escape ``"`` and ``\\``, use the short escapes ``\\a \\b \\f
\\n \\r \\t \\v``, write other C0 controls and DEL as ``\\xNN`` and any other
non-printable code point as ``\\uNNNN`` or ``\\UNNNNNNNN``. Byte values escape
every non-ASCII code point the same way and write bytes that are not valid
UTF-8 as ``\\xNN``.
"""

from __future__ import annotations

from numbers import Number
from typing import Final, cast

from kvlogr.compat import assert_never
from kvlogr.core.model_types import ValueKind

_SHORT_ESCAPES: Final[dict[str, str]] = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}
# surrogateescape maps undecodable bytes 0x80-0xFF onto U+DC80-U+DCFF
_ESCAPED_BYTE_LOW: Final[int] = 0xDC80
_ESCAPED_BYTE_HIGH: Final[int] = 0xDCFF
_ASCII_LIMIT: Final[int] = 0x80

BytesLike = bytes | bytearray | memoryview


def _escape_code_point(char: str) -> str:
    if char in _SHORT_ESCAPES:
        return _SHORT_ESCAPES[char]
    code = ord(char)
    if code < 0x20 or code == 0x7F:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def _escape_char(char: str, *, ascii_only: bool) -> str:
    if char in {'"', "\\"}:
        return "\\" + char
    if char.isprintable() and (not ascii_only or ord(char) < _ASCII_LIMIT):
        return char
    return _escape_code_point(char)


def quote_text(text: str) -> str:
    """Return ``text`` as a double-quoted literal.

    Printable characters, including non-ASCII ones, are kept as they are.

    Args:
        text: String to quote.

    Returns:
        Quoted and escaped representation of ``text``.

    Example:
        >>> quote_text('say "hi"\\n')
        '"say \\\\"hi\\\\"\\\\n"'
    """
    escaped = "".join(_escape_char(char, ascii_only=False) for char in text)
    return f'"{escaped}"'


def quote_bytes(data: BytesLike) -> str:
    """Return ``data`` as a double-quoted, ASCII-only literal.

    Args:
        data: Byte sequence to quote. Valid UTF-8 sequences are decoded and
            escaped by code point; invalid bytes are escaped individually.

    Returns:
        Quoted representation of ``data`` containing only printable ASCII.
    """
    decoded = bytes(data).decode("utf-8", errors="surrogateescape")
    parts: list[str] = []
    for char in decoded:
        code = ord(char)
        if _ESCAPED_BYTE_LOW <= code <= _ESCAPED_BYTE_HIGH:
            parts.append(f"\\x{code - 0xDC00:02x}")
        else:
            parts.append(_escape_char(char, ascii_only=True))
    return '"' + "".join(parts) + '"'


def _defines_str(value: object) -> bool:
    return type(value).__str__ is not object.__str__


def classify_value(value: object) -> ValueKind:
    """Classify ``value`` into the kind that decides how it is rendered.

    Checks run in a fixed order: text (``str`` or exception), then bytes-like,
    then a custom ``__str__``, then the generic fallback. Numbers and ``None``
    always fall back to the generic form.

    Args:
        value: Any logged value.

    Returns:
        The ``ValueKind`` for ``value``.
    """
    if isinstance(value, (str, BaseException)):
        return ValueKind.TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ValueKind.BYTES
    if value is not None and not isinstance(value, Number) and _defines_str(value):
        return ValueKind.STRINGER
    return ValueKind.DEFAULT


def safe_str(value: object) -> str:
    """Return ``str(value)``, or a placeholder naming the error if ``__str__`` raises."""
    try:
        return str(value)
    except Exception as exc:  # noqa: BLE001  # rendering must not fail on a broken __str__
        return f"<{type(value).__name__} __str__ failed: {type(exc).__name__}>"


def safe_repr(value: object) -> str:
    try:
        return repr(value)
    except Exception as exc:  # noqa: BLE001  # rendering must not fail on a broken __repr__
        return f"<{type(value).__name__} __repr__ failed: {type(exc).__name__}>"


def format_value(value: object) -> str:
    """Render ``value`` for the right-hand side of a ``key=value`` pair.

    Args:
        value: Any logged value.

    Returns:
        The rendered value, quoted unless it falls back to ``repr``.
    """
    kind = classify_value(value)
    match kind:
        case ValueKind.TEXT:
            return quote_text(value if isinstance(value, str) else safe_str(value))
        case ValueKind.BYTES:
            return quote_bytes(cast("BytesLike", value))
        case ValueKind.STRINGER:
            return quote_text(safe_str(value))
        case ValueKind.DEFAULT:
            return safe_repr(value)
        case _:  # pragma: no cover
            assert_never(kind)


__all__ = ["classify_value", "format_value", "quote_bytes", "quote_text", "safe_repr", "safe_str"]
