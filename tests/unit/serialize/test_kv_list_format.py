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

"""Unit tests for rendering key/value lists."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import PurePosixPath

import pytest

from kvlogr.serialize import MISSING_VALUE, kv_list_format, kv_list_string

pytestmark = pytest.mark.unit


@dataclass
class Point:
    x: int
    y: int


class Ticket:
    def __init__(self, number: int) -> None:
        self.number = number

    def __str__(self) -> str:
        return f"TICKET-{self.number}"


def _render(*kv: object) -> str:
    buffer = io.StringIO()
    kv_list_format(buffer, *kv)
    return buffer.getvalue()


def test_text_value_is_quoted() -> None:
    assert _render("msg", "hello") == ' msg="hello"'


def test_number_value_is_unquoted() -> None:
    assert _render("n", 5) == " n=5"


def test_exception_value_renders_its_message_quoted() -> None:
    assert _render("err", ValueError("error text")) == ' err="error text"'


def test_bytes_value_is_quoted_ascii_only() -> None:
    assert _render("data", b"ok\x00\xff") == ' data="ok\\x00\\xff"'


def test_stringer_value_uses_its_own_text() -> None:
    assert _render("ticket", Ticket(7)) == ' ticket="TICKET-7"'
    assert _render("path", PurePosixPath("/var/log")) == ' path="/var/log"'


def test_other_values_use_repr_unquoted() -> None:
    assert _render("point", Point(1, 2)) == " point=Point(x=1, y=2)"
    assert _render("labels", {"app": "web"}) == " labels={'app': 'web'}"
    assert _render("ids", [1, 2]) == " ids=[1, 2]"
    assert _render("flag", True) == " flag=True"
    assert _render("nothing", None) == " nothing=None"


def test_every_pair_is_preceded_by_one_space() -> None:
    assert _render("a", 1, "b", "two", "c", 3.5) == ' a=1 b="two" c=3.5'


def test_missing_value_uses_placeholder() -> None:
    assert MISSING_VALUE == "(MISSING)"
    assert _render("a", 1, "b") == ' a=1 b="(MISSING)"'


def test_non_string_keys_render_with_str() -> None:
    assert _render(42, "answer") == ' 42="answer"'


def test_empty_list_writes_nothing() -> None:
    assert _render() == ""


def test_appends_to_existing_buffer_content() -> None:
    buffer = io.StringIO()
    buffer.write("prefix")
    kv_list_format(buffer, "k", "v")
    kv_list_format(buffer, "n", 1)
    assert buffer.getvalue() == 'prefix k="v" n=1'


def test_kv_list_string_strips_leading_space() -> None:
    assert kv_list_string("msg", "hello", "n", 5) == 'msg="hello" n=5'
    assert kv_list_string() == ""
