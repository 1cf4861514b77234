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
"""Configuration properties for the server and the security headers.

Example ``spacehelmet.yaml``::

    spacehelmet:
      server:
        ssl_certfile: private/cert.pem
        ssl_keyfile: private/key.pem
      headers:
        no_sniff:
          enabled: false
        frameguard:
          mode: allow-from
          uri: https://www.example.com
        hsts:
          enabled: true
          mode: include-subdomains
          max_age: 31536000
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field

from spacehelmet.config import config_properties
from spacehelmet.policy import (
    EXPECT_CT_MAX_AGE_DEFAULT,
    HSTS_MAX_AGE_DEFAULT,
    ExpectCTPolicy,
    FramePolicy,
    HSTSPolicy,
    NoSniffPolicy,
    ReferrerPolicy,
    XSSPolicy,
)
from spacehelmet.policy_set import PolicySet
from spacehelmet.uri import Uri


@config_properties(prefix="spacehelmet.server")
@dataclass
class ServerProperties:
    """Transport settings of the host server (spacehelmet.server.*)."""

    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None

    @property
    def tls_enabled(self) -> bool:
        return bool(self.ssl_certfile and self.ssl_keyfile)


class NoSniffProperties(BaseModel):
    enabled: bool = True

    def to_policy(self) -> NoSniffPolicy | None:
        return NoSniffPolicy.ENABLE if self.enabled else None


class FrameguardProperties(BaseModel):
    enabled: bool = True
    mode: Literal["same-origin", "deny", "allow-from"] = "same-origin"
    uri: str | None = None

    def to_policy(self) -> FramePolicy | None:
        if not self.enabled:
            return None
        if self.mode == "deny":
            return FramePolicy.deny()
        if self.mode == "allow-from":
            return FramePolicy.allow_from(Uri.parse(self.uri or ""))
        return FramePolicy.same_origin()


class XSSProtectProperties(BaseModel):
    enabled: bool = True
    mode: Literal["disable", "enable", "enable-block", "enable-report"] = "enable-block"
    uri: str | None = None

    def to_policy(self) -> XSSPolicy | None:
        if not self.enabled:
            return None
        if self.mode == "disable":
            return XSSPolicy.disable()
        if self.mode == "enable":
            return XSSPolicy.enable()
        if self.mode == "enable-report":
            return XSSPolicy.enable_report(Uri.parse(self.uri or ""))
        return XSSPolicy.enable_block()


class HSTSProperties(BaseModel):
    enabled: bool = False
    mode: Literal["enable", "include-subdomains", "preload"] = "enable"
    max_age: int = Field(default=HSTS_MAX_AGE_DEFAULT, ge=0, le=2**32 - 1)

    def to_policy(self) -> HSTSPolicy | None:
        if not self.enabled:
            return None
        if self.mode == "include-subdomains":
            return HSTSPolicy.include_subdomains(self.max_age)
        if self.mode == "preload":
            return HSTSPolicy.preload(self.max_age)
        return HSTSPolicy.enable(self.max_age)


class ExpectCTProperties(BaseModel):
    enabled: bool = False
    mode: Literal["enforce", "report", "report-and-enforce"] = "enforce"
    max_age: int = Field(default=EXPECT_CT_MAX_AGE_DEFAULT, ge=0, le=2**32 - 1)
    uri: str | None = None

    def to_policy(self) -> ExpectCTPolicy | None:
        if not self.enabled:
            return None
        if self.mode == "report":
            return ExpectCTPolicy.report(self.max_age, Uri.parse(self.uri or ""))
        if self.mode == "report-and-enforce":
            return ExpectCTPolicy.report_and_enforce(self.max_age, Uri.parse(self.uri or ""))
        return ExpectCTPolicy.enforce(self.max_age)


class ReferrerPolicyProperties(BaseModel):
    enabled: bool = False
    policy: ReferrerPolicy = ReferrerPolicy.NO_REFERRER

    def to_policy(self) -> ReferrerPolicy | None:
        return self.policy if self.enabled else None


@config_properties(prefix="spacehelmet.headers")
class HeadersProperties(BaseModel):
    """Per-header policy configuration (spacehelmet.headers.*)."""

    no_sniff: NoSniffProperties = Field(default_factory=NoSniffProperties)
    xss_protect: XSSProtectProperties = Field(default_factory=XSSProtectProperties)
    frameguard: FrameguardProperties = Field(default_factory=FrameguardProperties)
    hsts: HSTSProperties = Field(default_factory=HSTSProperties)
    expect_ct: ExpectCTProperties = Field(default_factory=ExpectCTProperties)
    referrer_policy: ReferrerPolicyProperties = Field(default_factory=ReferrerPolicyProperties)

    def to_policy_set(self) -> PolicySet:
        """Build the :class:`PolicySet` described by these properties.

        Raises:
            InvalidUriError: If a report or allow-from URI is malformed.
        """
        return PolicySet(
            no_sniff_policy=self.no_sniff.to_policy(),
            xss_protect_policy=self.xss_protect.to_policy(),
            frameguard_policy=self.frameguard.to_policy(),
            hsts_policy=self.hsts.to_policy(),
            expect_ct_policy=self.expect_ct.to_policy(),
            referrer_policy=self.referrer_policy.to_policy(),
        )
