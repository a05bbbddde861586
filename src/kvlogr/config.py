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

"""Settings loading for kvlogr loggers.

Each setting is resolved with the precedence explicit argument > environment
variable > settings file > default. Settings files are TOML: in a
``pyproject.toml`` the values live in the ``[tool.kvlogr]`` table, in any
other file they sit at the top level.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kvlogr._infra.precedence import resolve_with_precedence
from kvlogr._internal.exceptions import ConfigReadError, InvalidSettingsError
from kvlogr._internal.logging_utils import structured_extra
from kvlogr.compat import tomllib

logger = logging.getLogger("kvlogr.config")

DEFAULT_NAME_SEPARATOR: Final[str] = "/"
DEFAULT_ERROR_KEY: Final[str] = "err"
NAME_SEPARATOR_ENV: Final[str] = "KVLOGR_NAME_SEPARATOR"
ERROR_KEY_ENV: Final[str] = "KVLOGR_ERROR_KEY"
PYPROJECT_NAME: Final[str] = "pyproject.toml"


class LoggerSettings(BaseModel):
    """Resolved settings consumed by ``KVLogger``.

    Attributes:
        name_separator: Joins name segments added with ``with_name``.
        error_key: Key of the leading pair ``error`` writes for its exception.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    name_separator: str = Field(default=DEFAULT_NAME_SEPARATOR, min_length=1)
    error_key: str = Field(default=DEFAULT_ERROR_KEY, min_length=1)


class _SettingsTableModel(BaseModel):
    """Shape of the settings table read from a TOML file."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    name_separator: str | None = None
    error_key: str | None = None


def _env(name: str) -> str | None:
    value = os.getenv(name)
    return value or None


def _extract_table(path: Path, raw_map: dict[str, object]) -> object:
    if path.name != PYPROJECT_NAME:
        return raw_map
    tool_section = raw_map.get("tool")
    if not isinstance(tool_section, dict):
        return {}
    return tool_section.get("kvlogr", {})


def _read_settings_file(config_path: Path | str | None) -> tuple[_SettingsTableModel, Path | None]:
    if config_path is None:
        candidate = Path.cwd() / PYPROJECT_NAME
        if not candidate.is_file():
            return _SettingsTableModel(), None
    else:
        candidate = Path(config_path)
    try:
        raw_map: dict[str, object] = tomllib.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        message = f"Unable to read kvlogr settings from {candidate}: {exc}"
        raise ConfigReadError(message) from exc
    try:
        table = _SettingsTableModel.model_validate(_extract_table(candidate, raw_map))
    except ValidationError as exc:
        message = f"Invalid kvlogr settings in {candidate}: {exc}"
        raise InvalidSettingsError(message) from exc
    return table, candidate


def load_settings(
    config_path: Path | str | None = None,
    *,
    name_separator: str | None = None,
    error_key: str | None = None,
) -> LoggerSettings:
    """Resolve ``LoggerSettings`` from arguments, environment, and settings file.

    Args:
        config_path: TOML file to read. ``None`` reads ``pyproject.toml`` from
            the current directory when it exists.
        name_separator: Explicit name separator; wins over every other source.
        error_key: Explicit error key; wins over every other source.

    Returns:
        Validated, immutable settings.

    Raises:
        ConfigReadError: If the settings file cannot be read or parsed.
        InvalidSettingsError: If the settings file or the resolved values fail
            validation.
    """
    table, source = _read_settings_file(config_path)
    resolved = {
        "name_separator": resolve_with_precedence(
            explicit_value=name_separator,
            env_value=_env(NAME_SEPARATOR_ENV),
            config_value=table.name_separator,
            default=DEFAULT_NAME_SEPARATOR,
        ),
        "error_key": resolve_with_precedence(
            explicit_value=error_key,
            env_value=_env(ERROR_KEY_ENV),
            config_value=table.error_key,
            default=DEFAULT_ERROR_KEY,
        ),
    }
    try:
        settings = LoggerSettings.model_validate(resolved)
    except ValidationError as exc:
        message = f"Invalid kvlogr settings: {exc}"
        raise InvalidSettingsError(message) from exc
    logger.debug(
        "Resolved logger settings",
        extra=structured_extra(
            "source",
            str(source) if source is not None else "defaults",
            "name_separator",
            settings.name_separator,
            "error_key",
            settings.error_key,
        ),
    )
    return settings


__all__ = [
    "DEFAULT_ERROR_KEY",
    "DEFAULT_NAME_SEPARATOR",
    "ERROR_KEY_ENV",
    "NAME_SEPARATOR_ENV",
    "LoggerSettings",
    "load_settings",
]
