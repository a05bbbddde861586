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

"""Unit tests for the internal exception hierarchy and public exports."""

from __future__ import annotations

import pytest

import kvlogr
from kvlogr._internal import exceptions as internal_exceptions

pytestmark = pytest.mark.unit


def test_public_exceptions_share_the_internal_hierarchy() -> None:
    assert kvlogr.KvlogrError is internal_exceptions.KvlogrError
    assert issubclass(kvlogr.InvalidSettingsError, ValueError)
    assert issubclass(kvlogr.InvalidSettingsError, kvlogr.KvlogrValidationError)
    assert issubclass(kvlogr.ConfigReadError, kvlogr.KvlogrError)


def test_public_api_exports_are_importable() -> None:
    for name in kvlogr.__all__:
        assert hasattr(kvlogr, name), name
    assert kvlogr.__version__ == "0.1.0"
