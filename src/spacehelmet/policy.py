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
"""Header policy catalog: one typed policy per supported security header.

Every policy knows its header name and renders its header value; the
encodings below are what browsers expect byte-for-byte.

=========================  ===========================================
Policy                     Header
=========================  ===========================================
:class:`NoSniffPolicy`     ``X-Content-Type-Options``
:class:`FramePolicy`       ``X-Frame-Options``
:class:`XSSPolicy`         ``X-XSS-Protection``
:class:`HSTSPolicy`        ``Strict-Transport-Security``
:class:`ExpectCTPolicy`    ``Expect-CT``
:class:`ReferrerPolicy`    ``Referrer-Policy``
=========================  ===========================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, nonmember
from typing import ClassVar, NamedTuple, Protocol, runtime_checkable

from spacehelmet.errors import PolicyConfigurationError
from spacehelmet.uri import Uri

MaxAge = int

#: 30 days in seconds, see the Expect-CT IETF draft.
EXPECT_CT_MAX_AGE_DEFAULT: MaxAge = 2_592_000

#: One year in seconds, a setting for production environments.
HSTS_MAX_AGE_DEFAULT: MaxAge = 31_536_000

_MAX_AGE_LIMIT = 2**32 - 1


class Header(NamedTuple):
    """A single encoded response header."""

    name: str
    value: str


@runtime_checkable
class HeaderPolicy(Protocol):
    """Contract shared by every policy in the catalog."""

    header_name: ClassVar[str]

    def header_value(self) -> str: ...


def encode(policy: HeaderPolicy) -> Header:
    """Encode *policy* into its ``(name, value)`` header pair."""
    return Header(policy.header_name, policy.header_value())


def _check_max_age(policy: str, max_age: object) -> None:
    if isinstance(max_age, bool) or not isinstance(max_age, int):
        raise PolicyConfigurationError(
            f"{policy} max-age must be an integer number of seconds, got {max_age!r}",
            policy=policy,
            max_age=max_age,
        )
    if not 0 <= max_age <= _MAX_AGE_LIMIT:
        raise PolicyConfigurationError(
            f"{policy} max-age must be between 0 and {_MAX_AGE_LIMIT}, got {max_age}",
            policy=policy,
            max_age=max_age,
        )


def _check_uri(policy: str, mode: Enum, uri: Uri | None, required: bool) -> None:
    if required and not isinstance(uri, Uri):
        raise PolicyConfigurationError(
            f"{policy} mode '{mode.value}' requires a parsed Uri, got {uri!r}",
            policy=policy,
            mode=mode.value,
        )
    if not required and uri is not None:
        raise PolicyConfigurationError(
            f"{policy} mode '{mode.value}' does not take a URI",
            policy=policy,
            mode=mode.value,
        )


# ---------------------------------------------------------------------------
# X-Content-Type-Options
# ---------------------------------------------------------------------------


class NoSniffPolicy(Enum):
    """X-Content-Type-Options: stops browsers from MIME-sniffing responses."""

    ENABLE = "nosniff"

    header_name: ClassVar[str] = nonmember("X-Content-Type-Options")

    @classmethod
    def default(cls) -> NoSniffPolicy:
        return cls.ENABLE

    def header_value(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# X-Frame-Options
# ---------------------------------------------------------------------------


class FrameMode(Enum):
    SAME_ORIGIN = "same-origin"
    DENY = "deny"
    ALLOW_FROM = "allow-from"


@dataclass(frozen=True)
class FramePolicy:
    """X-Frame-Options: controls whether the page may be framed (clickjacking)."""

    header_name: ClassVar[str] = "X-Frame-Options"

    mode: FrameMode
    uri: Uri | None = None

    def __post_init__(self) -> None:
        _check_uri("FramePolicy", self.mode, self.uri, self.mode is FrameMode.ALLOW_FROM)

    @classmethod
    def same_origin(cls) -> FramePolicy:
        return cls(FrameMode.SAME_ORIGIN)

    @classmethod
    def deny(cls) -> FramePolicy:
        return cls(FrameMode.DENY)

    @classmethod
    def allow_from(cls, uri: Uri) -> FramePolicy:
        return cls(FrameMode.ALLOW_FROM, uri)

    @classmethod
    def default(cls) -> FramePolicy:
        return cls.same_origin()

    def header_value(self) -> str:
        if self.mode is FrameMode.DENY:
            return "DENY"
        if self.mode is FrameMode.SAME_ORIGIN:
            return "SAMEORIGIN"
        return f"ALLOW-FROM {self.uri}"


# ---------------------------------------------------------------------------
# X-XSS-Protection
# ---------------------------------------------------------------------------


class XSSMode(Enum):
    DISABLE = "disable"
    ENABLE = "enable"
    ENABLE_BLOCK = "enable-block"
    ENABLE_REPORT = "enable-report"


@dataclass(frozen=True)
class XSSPolicy:
    """X-XSS-Protection: drives the legacy browser XSS auditor."""

    header_name: ClassVar[str] = "X-XSS-Protection"

    mode: XSSMode
    uri: Uri | None = None

    def __post_init__(self) -> None:
        _check_uri("XSSPolicy", self.mode, self.uri, self.mode is XSSMode.ENABLE_REPORT)

    @classmethod
    def disable(cls) -> XSSPolicy:
        return cls(XSSMode.DISABLE)

    @classmethod
    def enable(cls) -> XSSPolicy:
        return cls(XSSMode.ENABLE)

    @classmethod
    def enable_block(cls) -> XSSPolicy:
        return cls(XSSMode.ENABLE_BLOCK)

    @classmethod
    def enable_report(cls, uri: Uri) -> XSSPolicy:
        return cls(XSSMode.ENABLE_REPORT, uri)

    @classmethod
    def default(cls) -> XSSPolicy:
        return cls.enable_block()

    def header_value(self) -> str:
        if self.mode is XSSMode.DISABLE:
            return "0"
        if self.mode is XSSMode.ENABLE:
            return "1"
        if self.mode is XSSMode.ENABLE_BLOCK:
            return "1; mode=block"
        return f"1; report={self.uri}"


# ---------------------------------------------------------------------------
# Strict-Transport-Security
# ---------------------------------------------------------------------------


class HSTSMode(Enum):
    ENABLE = "enable"
    INCLUDE_SUBDOMAINS = "include-subdomains"
    PRELOAD = "preload"


@dataclass(frozen=True)
class HSTSPolicy:
    """Strict-Transport-Security: tells browsers to only use HTTPS."""

    header_name: ClassVar[str] = "Strict-Transport-Security"

    mode: HSTSMode
    max_age: MaxAge = HSTS_MAX_AGE_DEFAULT

    def __post_init__(self) -> None:
        _check_max_age("HSTSPolicy", self.max_age)

    @classmethod
    def enable(cls, max_age: MaxAge = HSTS_MAX_AGE_DEFAULT) -> HSTSPolicy:
        return cls(HSTSMode.ENABLE, max_age)

    @classmethod
    def include_subdomains(cls, max_age: MaxAge = HSTS_MAX_AGE_DEFAULT) -> HSTSPolicy:
        return cls(HSTSMode.INCLUDE_SUBDOMAINS, max_age)

    @classmethod
    def preload(cls, max_age: MaxAge = HSTS_MAX_AGE_DEFAULT) -> HSTSPolicy:
        return cls(HSTSMode.PRELOAD, max_age)

    @classmethod
    def default(cls) -> HSTSPolicy:
        return cls.enable(HSTS_MAX_AGE_DEFAULT)

    def header_value(self) -> str:
        if self.mode is HSTSMode.INCLUDE_SUBDOMAINS:
            return f"max-age={self.max_age} ; includeSubDomains"
        if self.mode is HSTSMode.PRELOAD:
            return f"max-age={self.max_age} ; preload"
        return f"max-age={self.max_age}"


# ---------------------------------------------------------------------------
# Expect-CT
# ---------------------------------------------------------------------------


class ExpectCTMode(Enum):
    ENFORCE = "enforce"
    REPORT = "report"
    REPORT_AND_ENFORCE = "report-and-enforce"


@dataclass(frozen=True)
class ExpectCTPolicy:
    """Expect-CT: opts into Certificate Transparency enforcement/reporting."""

    header_name: ClassVar[str] = "Expect-CT"

    mode: ExpectCTMode
    max_age: MaxAge = EXPECT_CT_MAX_AGE_DEFAULT
    uri: Uri | None = None

    def __post_init__(self) -> None:
        _check_max_age("ExpectCTPolicy", self.max_age)
        _check_uri("ExpectCTPolicy", self.mode, self.uri, self.mode is not ExpectCTMode.ENFORCE)

    @classmethod
    def enforce(cls, max_age: MaxAge = EXPECT_CT_MAX_AGE_DEFAULT) -> ExpectCTPolicy:
        return cls(ExpectCTMode.ENFORCE, max_age)

    @classmethod
    def report(cls, max_age: MaxAge, uri: Uri) -> ExpectCTPolicy:
        return cls(ExpectCTMode.REPORT, max_age, uri)

    @classmethod
    def report_and_enforce(cls, max_age: MaxAge, uri: Uri) -> ExpectCTPolicy:
        return cls(ExpectCTMode.REPORT_AND_ENFORCE, max_age, uri)

    @classmethod
    def default(cls) -> ExpectCTPolicy:
        return cls.enforce(EXPECT_CT_MAX_AGE_DEFAULT)

    def header_value(self) -> str:
        if self.mode is ExpectCTMode.ENFORCE:
            return f"max-age={self.max_age}, enforce"
        if self.mode is ExpectCTMode.REPORT:
            return f'max-age={self.max_age}, report-uri="{self.uri}"'
        return f'max-age={self.max_age}, enforce, report-uri="{self.uri}"'


# ---------------------------------------------------------------------------
# Referrer-Policy
# ---------------------------------------------------------------------------


class ReferrerPolicy(Enum):
    """Referrer-Policy: how much referrer information requests may carry."""

    NO_REFERRER = "no-referrer"
    NO_REFERRER_WHEN_DOWNGRADE = "no-referrer-when-downgrade"
    ORIGIN = "origin"
    ORIGIN_WHEN_CROSS_ORIGIN = "origin-when-cross-origin"
    SAME_ORIGIN = "same-origin"
    STRICT_ORIGIN = "strict-origin"
    STRICT_ORIGIN_WHEN_CROSS_ORIGIN = "strict-origin-when-cross-origin"
    UNSAFE_URL = "unsafe-url"

    header_name: ClassVar[str] = nonmember("Referrer-Policy")

    @classmethod
    def default(cls) -> ReferrerPolicy:
        return cls.NO_REFERRER

    def header_value(self) -> str:
        return self.value
