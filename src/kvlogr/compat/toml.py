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

"""Compatibility layer for TOML parsing across Python versions.

Settings files are read with `tomllib` on Python 3.11+ and with the `tomli`
backport on Python 3.10. Callers always import the name `tomllib`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import tomli as tomllib
else:
    try:
        import tomllib  # py311+
    except ModuleNotFoundError:  # py<3.11
        import tomli as tomllib

__all__ = ["tomllib"]
