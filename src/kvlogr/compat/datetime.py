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

"""Compatibility helpers for timezone handling.

Python 3.11 introduced `datetime.UTC`; earlier versions only provide
`datetime.timezone.utc`. The JSON log formatter stamps records in UTC through
this single name.
"""

from __future__ import annotations

import datetime as _dt
from datetime import timezone as _timezone

UTC = getattr(_dt, "UTC", _timezone.utc)

__all__ = ["UTC"]
