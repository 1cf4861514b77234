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
"""PolicySet: the per-header configuration applied to every response.

Usage::

    policies = (
        PolicySet()
        .hsts(HSTSPolicy.default())
        .no_sniff(None)  # a header is turned off by setting its policy to None
        .frameguard(FramePolicy.allow_from(Uri.parse("https://example.com")))
    )

Enabled by default: ``no_sniff``, ``frameguard`` and ``xss_protect``.
``hsts`` is unset, but when TLS is active outside development the startup
guard forces :data:`HSTSPolicy.default` (see :mod:`spacehelmet.guard`).
"""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from spacehelmet.errors import PolicyConfigurationError
from spacehelmet.policy import (
    ExpectCTPolicy,
    FramePolicy,
    HeaderPolicy,
    HSTSPolicy,
    NoSniffPolicy,
    ReferrerPolicy,
    XSSPolicy,
)


class ForceHstsFlag:
    """Write-once flag that switches on the fallback HSTS policy.

    Set at most once by the startup guard before requests are served, then
    read without locking on every response.
    """

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def is_active(self) -> bool:
        return self._event.is_set()

    def activate(self) -> None:
        self._event.set()

    def __repr__(self) -> str:
        return f"ForceHstsFlag(active={self.is_active})"


class HeaderSlot(Enum):
    """User-facing header slots, with the policy field backing each one."""

    NO_SNIFF = "no_sniff_policy"
    XSS_PROTECT = "xss_protect_policy"
    FRAMEGUARD = "frameguard_policy"
    HSTS = "hsts_policy"
    EXPECT_CT = "expect_ct_policy"
    REFERRER_POLICY = "referrer_policy"

    @property
    def policy_type(self) -> type:
        return _SLOT_TYPES[self]


_SLOT_TYPES: dict[HeaderSlot, type] = {
    HeaderSlot.NO_SNIFF: NoSniffPolicy,
    HeaderSlot.XSS_PROTECT: XSSPolicy,
    HeaderSlot.FRAMEGUARD: FramePolicy,
    HeaderSlot.HSTS: HSTSPolicy,
    HeaderSlot.EXPECT_CT: ExpectCTPolicy,
    HeaderSlot.REFERRER_POLICY: ReferrerPolicy,
}


@dataclass(frozen=True)
class PolicySet:
    """Zero-or-one policy per header slot plus the forced-HSTS runtime flag.

    Instances are immutable: every builder method returns a new ``PolicySet``.
    The only runtime state is :attr:`force_hsts_active`, flipped once by the
    startup guard.
    """

    no_sniff_policy: NoSniffPolicy | None = field(default_factory=NoSniffPolicy.default)
    xss_protect_policy: XSSPolicy | None = field(default_factory=XSSPolicy.default)
    frameguard_policy: FramePolicy | None = field(default_factory=FramePolicy.default)
    hsts_policy: HSTSPolicy | None = None
    expect_ct_policy: ExpectCTPolicy | None = None
    referrer_policy: ReferrerPolicy | None = None
    force_hsts_policy: HSTSPolicy = field(default_factory=HSTSPolicy.default, init=False)
    _force_hsts: ForceHstsFlag = field(
        default_factory=ForceHstsFlag, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        for slot in HeaderSlot:
            _check_slot(slot, getattr(self, slot.value))

    # ------------------------------------------------------------------
    # Builder API
    # ------------------------------------------------------------------

    def configure(self, slot: HeaderSlot, policy: Any | None) -> PolicySet:
        """Return a copy with *slot* set to *policy*, or disabled if ``None``."""
        _check_slot(slot, policy)
        return dataclasses.replace(self, **{slot.value: policy})

    def no_sniff(self, policy: NoSniffPolicy | None) -> PolicySet:
        """Set X-Content-Type-Options, or disable it with ``None``."""
        return self.configure(HeaderSlot.NO_SNIFF, policy)

    def xss_protect(self, policy: XSSPolicy | None) -> PolicySet:
        """Set X-XSS-Protection, or disable it with ``None``."""
        return self.configure(HeaderSlot.XSS_PROTECT, policy)

    def frameguard(self, policy: FramePolicy | None) -> PolicySet:
        """Set X-Frame-Options, or disable it with ``None``."""
        return self.configure(HeaderSlot.FRAMEGUARD, policy)

    def hsts(self, policy: HSTSPolicy | None) -> PolicySet:
        """Set Strict-Transport-Security, or disable it with ``None``.

        An explicit policy always takes priority over the forced fallback.
        """
        return self.configure(HeaderSlot.HSTS, policy)

    def expect_ct(self, policy: ExpectCTPolicy | None) -> PolicySet:
        """Set Expect-CT, or disable it with ``None``."""
        return self.configure(HeaderSlot.EXPECT_CT, policy)

    def referrer(self, policy: ReferrerPolicy | None) -> PolicySet:
        """Set Referrer-Policy, or disable it with ``None``."""
        return self.configure(HeaderSlot.REFERRER_POLICY, policy)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def policy_for(self, slot: HeaderSlot) -> HeaderPolicy | None:
        return getattr(self, slot.value)

    def configured_slots(self) -> list[HeaderSlot]:
        return [slot for slot in HeaderSlot if self.policy_for(slot) is not None]

    @property
    def force_hsts_active(self) -> bool:
        return self._force_hsts.is_active

    def activate_force_hsts(self) -> None:
        """Switch on the fallback HSTS policy. One-way, for the startup guard."""
        self._force_hsts.activate()


def _check_slot(slot: HeaderSlot, policy: Any | None) -> None:
    if not isinstance(slot, HeaderSlot):
        raise PolicyConfigurationError(f"Unknown header slot {slot!r}", slot=slot)
    if policy is not None and not isinstance(policy, slot.policy_type):
        raise PolicyConfigurationError(
            f"Slot '{slot.name.lower()}' expects {slot.policy_type.__name__}, "
            f"got {type(policy).__name__}",
            slot=slot.name.lower(),
            policy=type(policy).__name__,
        )
