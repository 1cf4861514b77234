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
"""Validated URI value type embedded in report/allow-from policies."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from spacehelmet.errors import InvalidUriError

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_FORBIDDEN_RE = re.compile(r'[\s"\x00-\x1f\x7f]')


@dataclass(frozen=True, init=False)
class Uri:
    """An absolute or origin-form URI that has already been validated.

    Instances can only be obtained through :meth:`parse`, so a policy that
    embeds a ``Uri`` never carries an unchecked string into a header value.
    """

    value: str

    def __init__(self, *args: object, **kwargs: object) -> None:
        raise TypeError("Uri instances must be created with Uri.parse()")

    @classmethod
    def parse(cls, raw: str) -> Uri:
        """Parse *raw* into a :class:`Uri`.

        Accepts ``scheme://authority[/path][?query][#fragment]`` or an
        origin-form path starting with ``/``.

        Raises:
            InvalidUriError: If *raw* is not a well-formed URI.
        """
        if not isinstance(raw, str):
            raise InvalidUriError(repr(raw), "expected a string")
        if not raw:
            raise InvalidUriError(raw, "empty string")
        if _FORBIDDEN_RE.search(raw):
            raise InvalidUriError(raw, "contains whitespace, quotes or control characters")

        try:
            parts = urlsplit(raw)
        except ValueError as exc:
            raise InvalidUriError(raw, str(exc)) from exc

        if raw.startswith("/"):
            if raw.startswith("//"):
                raise InvalidUriError(raw, "origin-form path must not start with '//'")
        elif not parts.scheme or not _SCHEME_RE.match(parts.scheme):
            raise InvalidUriError(raw, "missing or malformed scheme")
        elif not parts.netloc:
            raise InvalidUriError(raw, "missing authority")
        else:
            try:
                parts.port  # noqa: B018 - raises on a malformed port
            except ValueError as exc:
                raise InvalidUriError(raw, str(exc)) from exc

        uri = object.__new__(cls)
        object.__setattr__(uri, "value", raw)
        return uri

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Uri({self.value!r})"
