# Copyright 2026 Firefly Software Solutions Inc.
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
"""Space Helmet exception hierarchy.

Configuration problems are the only failures: they surface when a policy is
built or when configuration is bound, never while headers are applied.
"""

from __future__ import annotations


class HelmetException(Exception):
    """Base exception for all Space Helmet errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INVALID_URI").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class InvalidUriError(HelmetException, ValueError):
    """A string could not be parsed into a :class:`~spacehelmet.uri.Uri`."""

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(
            message=f"Invalid URI '{raw}': {reason}",
            code="INVALID_URI",
            context={"uri": raw, "reason": reason},
        )


class PolicyConfigurationError(HelmetException, ValueError):
    """A header policy or policy set was configured with inconsistent values."""

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message=message, code="POLICY_CONFIGURATION", context=dict(context))
