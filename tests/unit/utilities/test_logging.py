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

"""Unit tests for kvlogr's own logging setup."""

from __future__ import annotations

import json
import logging
import os
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

import pytest

from kvlogr._internal.logging_utils import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra
from kvlogr.core.model_types import LogFormat

if TYPE_CHECKING:
    from collections.abc import Generator

pytestmark = pytest.mark.unit


def test_configure_logging_text_renders_structured_fields(capsys: pytest.CaptureFixture[str]) -> None:
    config = configure_logging("text")
    assert config.format is LogFormat.TEXT
    logger = logging.getLogger("kvlogr")
    logger.info("hello", extra=structured_extra("tool", "pyright", "count", 2, "tool", "mypy"))
    logger.warning("plain")
    captured = capsys.readouterr()
    lines = [line for line in (captured.err or captured.out).splitlines() if line]
    assert lines[-2] == '[INFO] hello count=2 tool="mypy"'
    assert lines[-1] == "[WARNING] plain"


def test_configure_logging_json_emits_structured_logs(capsys: pytest.CaptureFixture[str]) -> None:
    _ = configure_logging("json")
    logger = logging.getLogger("kvlogr")
    logger.info(
        "hello",
        extra=structured_extra("format", LogFormat.JSON, "cached", False, "counts", (1, 2), "orphan"),
    )

    def _raise_logging_failure() -> None:
        message = "boom"
        raise RuntimeError(message)

    try:
        _raise_logging_failure()
    except RuntimeError:
        logger.exception("broken")
    captured = capsys.readouterr()
    stream = captured.err or captured.out
    lines = [line for line in stream.strip().splitlines() if line]
    payload = json.loads(lines[-2])
    assert payload["message"] == "hello"
    assert payload["level"] == "info"
    assert payload["logger"] == "kvlogr"
    assert payload["fields"] == {
        "format": "json",
        "cached": False,
        "counts": [1, 2],
        "orphan": "(MISSING)",
    }

    exception_payload = json.loads(lines[-1])
    assert exception_payload["message"] == "broken"
    assert "exc_info" in exception_payload
    assert "fields" not in exception_payload


def test_configure_logging_respects_level(capsys: pytest.CaptureFixture[str]) -> None:
    assert LOG_LEVELS == ("debug", "info", "warning", "error")
    assert LOG_FORMATS == ("text", "json")
    config = configure_logging("text", log_level="warning")
    assert config.level == logging.WARNING
    assert config.level_name == "warning"
    logger = logging.getLogger("kvlogr")
    logger.info("ignored")
    logger.warning("recorded")
    captured = capsys.readouterr()
    combined = captured.out + captured.err
    assert "ignored" not in combined
    assert "recorded" in combined


def test_configure_logging_honors_env_overrides(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("KVLOGR_LOG_FORMAT", "json")
    monkeypatch.setenv("KVLOGR_LOG_LEVEL", "error")
    _ = configure_logging()
    logger = logging.getLogger("kvlogr")
    logger.warning("warned")
    logger.error("failed", extra=structured_extra("exit_code", 1))
    captured = capsys.readouterr()
    lines = [line for line in (captured.out + captured.err).splitlines() if line]
    assert json.loads(lines[-1])["message"] == "failed"
    assert json.loads(lines[-1])["fields"] == {"exit_code": 1}
    assert all("warned" not in line for line in lines)


def test_configure_logging_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown log format 'yaml'"):
        _ = configure_logging("yaml")


def test_json_fields_render_stringers_and_bytes_as_plain_text(capsys: pytest.CaptureFixture[str]) -> None:
    _ = configure_logging("json")
    logger = logging.getLogger("kvlogr")
    logger.info("paths", extra=structured_extra("path", PurePosixPath("/var/log"), "raw", b"ok\xff"))
    captured = capsys.readouterr()
    lines = [line for line in (captured.err or captured.out).splitlines() if line]
    payload = json.loads(lines[-1])
    assert payload["fields"] == {"path": "/var/log", "raw": "ok\\xff"}


def test_json_fields_with_equal_text_keys_keep_the_later_pair(capsys: pytest.CaptureFixture[str]) -> None:
    _ = configure_logging("json")
    logger = logging.getLogger("kvlogr")
    logger.info("keys", extra=structured_extra(1, "a", "other", 2, "1", "b"))
    captured = capsys.readouterr()
    lines = [line for line in (captured.err or captured.out).splitlines() if line]
    payload = json.loads(lines[-1])
    assert payload["fields"] == {"other": 2, "1": "b"}
    assert list(payload["fields"]) == ["other", "1"]


def test_structured_extra_wraps_key_values() -> None:
    assert structured_extra("a", 1, "b") == {"kv": ("a", 1, "b")}
    assert structured_extra() == {"kv": ()}


@pytest.fixture(autouse=True)
def reset_kvlogr_logging() -> Generator[None, None, None]:
    logger = logging.getLogger("kvlogr")
    child = logging.getLogger("kvlogr.config")
    handlers = list(logger.handlers)
    level = logger.level
    child_level = child.level
    propagate = logger.propagate
    env_log_format = os.environ.get("KVLOGR_LOG_FORMAT")
    env_log_level = os.environ.get("KVLOGR_LOG_LEVEL")
    yield
    logger.handlers.clear()
    logger.handlers.extend(handlers)
    logger.setLevel(level)
    child.setLevel(child_level)
    logger.propagate = propagate
    if env_log_format is None:
        _ = os.environ.pop("KVLOGR_LOG_FORMAT", None)
    else:
        os.environ["KVLOGR_LOG_FORMAT"] = env_log_format
    if env_log_level is None:
        _ = os.environ.pop("KVLOGR_LOG_LEVEL", None)
    else:
        os.environ["KVLOGR_LOG_LEVEL"] = env_log_level
