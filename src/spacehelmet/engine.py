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
"""Applies a PolicySet's headers to an outgoing response."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

import structlog

from spacehelmet.policy import HeaderPolicy, encode
from spacehelmet.policy_set import HeaderSlot, PolicySet

logger = structlog.get_logger("spacehelmet.engine")

# HSTS is handled separately so the forced fallback can stand in for it.
_APPLY_ORDER = (
    HeaderSlot.NO_SNIFF,
    HeaderSlot.XSS_PROTECT,
    HeaderSlot.FRAMEGUARD,
    HeaderSlot.EXPECT_CT,
    HeaderSlot.REFERRER_POLICY,
)


@runtime_checkable
class HeaderSink(Protocol):
    """The response headers of the host server, as seen by the engine."""

    def has_header(self, name: str) -> bool: ...

    def set_header(self, name: str, value: str) -> None: ...


class DictHeaderSink:
    """In-memory, case-insensitive :class:`HeaderSink`."""

    def __init__(self, headers: dict[str, str] | None = None) -> None:
        self._headers: dict[str, tuple[str, str]] = {}
        for name, value in (headers or {}).items():
            self.set_header(name, value)

    def has_header(self, name: str) -> bool:
        return name.lower() in self._headers

    def set_header(self, name: str, value: str) -> None:
        self._headers[name.lower()] = (name, value)

    def get(self, name: str, default: str | None = None) -> str | None:
        entry = self._headers.get(name.lower())
        return entry[1] if entry is not None else default

    def as_dict(self) -> dict[str, str]:
        return dict(self._headers.values())

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._headers.values())

    def __len__(self) -> int:
        return len(self._headers)


def apply_policies(policies: PolicySet, sink: HeaderSink) -> None:
    """Set every configured header of *policies* on *sink*.

    Called once per response after the handler has produced it. Headers that
    are already present are overwritten with a warning; headers outside the
    configured slots are never read or touched.
    """
    for slot in _APPLY_ORDER:
        policy = policies.policy_for(slot)
        if policy is not None:
            _set_header(sink, policy)

    if policies.hsts_policy is not None:
        _set_header(sink, policies.hsts_policy)
    elif policies.force_hsts_active:
        _set_header(sink, policies.force_hsts_policy)


def _set_header(sink: HeaderSink, policy: HeaderPolicy) -> None:
    header = encode(policy)
    if sink.has_header(header.name):
        logger.warning(
            "existing_header_overwritten",
            header=header.name,
            value=header.value,
        )
    sink.set_header(header.name, header.value)
