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

"""Core type definitions shared by the serializer and the logger adapter.

- Type aliases: key/value list shapes and level tags
- Model types: value classification and log output formats
- Protocols: the buffer, sink, and logger capabilities kvlogr depends on
"""

from __future__ import annotations

from . import model_types, protocols, type_aliases

__all__ = [
    "model_types",
    "protocols",
    "type_aliases",
]
