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
"""Tests for the header policy catalog and its encodings."""

from __future__ import annotations

import pytest

from spacehelmet.errors import PolicyConfigurationError
from spacehelmet.policy import (
    EXPECT_CT_MAX_AGE_DEFAULT,
    HSTS_MAX_AGE_DEFAULT,
    ExpectCTMode,
    ExpectCTPolicy,
    FrameMode,
    FramePolicy,
    Header,
    HeaderPolicy,
    HSTSPolicy,
    NoSniffPolicy,
    ReferrerPolicy,
    XSSPolicy,
    encode,
)
from spacehelmet.uri import Uri

GOOGLE = "https://www.google.com"


@pytest.fixture
def google() -> Uri:
    return Uri.parse(GOOGLE)


class TestMaxAgeDefaults:
    def test_expect_ct_default_is_thirty_days(self):
        assert EXPECT_CT_MAX_AGE_DEFAULT == 30 * 24 * 60 * 60

    def test_hsts_default_is_one_year(self):
        assert HSTS_MAX_AGE_DEFAULT == 365 * 24 * 60 * 60


class TestNoSniffPolicy:
    def test_encoding(self):
        assert encode(NoSniffPolicy.ENABLE) == Header("X-Content-Type-Options", "nosniff")

    def test_default(self):
        assert NoSniffPolicy.default() is NoSniffPolicy.ENABLE

    def test_single_member(self):
        assert list(NoSniffPolicy) == [NoSniffPolicy.ENABLE]


class TestFramePolicy:
    def test_same_origin(self):
        assert encode(FramePolicy.same_origin()) == Header("X-Frame-Options", "SAMEORIGIN")

    def test_deny(self):
        assert encode(FramePolicy.deny()).value == "DENY"

    def test_allow_from(self, google):
        assert encode(FramePolicy.allow_from(google)).value == f"ALLOW-FROM {GOOGLE}"

    def test_default_is_same_origin(self):
        assert FramePolicy.default() == FramePolicy.same_origin()

    def test_allow_from_requires_uri(self):
        with pytest.raises(PolicyConfigurationError):
            FramePolicy(FrameMode.ALLOW_FROM)

    def test_allow_from_rejects_raw_string(self):
        with pytest.raises(PolicyConfigurationError):
            FramePolicy.allow_from(GOOGLE)  # type: ignore[arg-type]

    def test_deny_rejects_uri(self, google):
        with pytest.raises(PolicyConfigurationError):
            FramePolicy(FrameMode.DENY, google)


class TestXSSPolicy:
    @pytest.mark.parametrize(
        ("policy", "expected"),
        [
            (XSSPolicy.disable(), "0"),
            (XSSPolicy.enable(), "1"),
            (XSSPolicy.enable_block(), "1; mode=block"),
        ],
    )
    def test_encoding(self, policy, expected):
        assert encode(policy) == Header("X-XSS-Protection", expected)

    def test_enable_report(self, google):
        assert encode(XSSPolicy.enable_report(google)).value == f"1; report={GOOGLE}"

    def test_default_is_enable_block(self):
        assert XSSPolicy.default().header_value() == "1; mode=block"

    def test_enable_report_rejects_raw_string(self):
        with pytest.raises(PolicyConfigurationError):
            XSSPolicy.enable_report(GOOGLE)  # type: ignore[arg-type]


class TestHSTSPolicy:
    def test_enable(self):
        assert encode(HSTSPolicy.enable(31536000)) == Header("Strict-Transport-Security", "max-age=31536000")

    def test_include_subdomains(self):
        assert HSTSPolicy.include_subdomains(60).header_value() == "max-age=60 ; includeSubDomains"

    def test_preload(self):
        assert HSTSPolicy.preload(60).header_value() == "max-age=60 ; preload"

    def test_default(self):
        assert HSTSPolicy.default() == HSTSPolicy.enable(HSTS_MAX_AGE_DEFAULT)

    def test_zero_max_age_allowed(self):
        assert HSTSPolicy.enable(0).header_value() == "max-age=0"

    @pytest.mark.parametrize("max_age", [-1, 2**32, 1.5, "60", True])
    def test_invalid_max_age_rejected(self, max_age):
        with pytest.raises(PolicyConfigurationError):
            HSTSPolicy.enable(max_age)


class TestExpectCTPolicy:
    def test_enforce(self):
        assert encode(ExpectCTPolicy.enforce(2592000)) == Header("Expect-CT", "max-age=2592000, enforce")

    def test_report(self, google):
        assert ExpectCTPolicy.report(30, google).header_value() == f'max-age=30, report-uri="{GOOGLE}"'

    def test_report_and_enforce(self, google):
        policy = ExpectCTPolicy.report_and_enforce(30, google)
        assert policy.header_value() == f'max-age=30, enforce, report-uri="{GOOGLE}"'

    def test_default(self):
        assert ExpectCTPolicy.default().header_value() == f"max-age={EXPECT_CT_MAX_AGE_DEFAULT}, enforce"

    def test_report_requires_uri(self):
        with pytest.raises(PolicyConfigurationError):
            ExpectCTPolicy(ExpectCTMode.REPORT, 30)

    def test_enforce_rejects_uri(self, google):
        with pytest.raises(PolicyConfigurationError):
            ExpectCTPolicy(ExpectCTMode.ENFORCE, 30, google)


class TestReferrerPolicy:
    @pytest.mark.parametrize(
        ("policy", "expected"),
        [
            (ReferrerPolicy.NO_REFERRER, "no-referrer"),
            (ReferrerPolicy.NO_REFERRER_WHEN_DOWNGRADE, "no-referrer-when-downgrade"),
            (ReferrerPolicy.ORIGIN, "origin"),
            (ReferrerPolicy.ORIGIN_WHEN_CROSS_ORIGIN, "origin-when-cross-origin"),
            (ReferrerPolicy.SAME_ORIGIN, "same-origin"),
            (ReferrerPolicy.STRICT_ORIGIN, "strict-origin"),
            (ReferrerPolicy.STRICT_ORIGIN_WHEN_CROSS_ORIGIN, "strict-origin-when-cross-origin"),
            (ReferrerPolicy.UNSAFE_URL, "unsafe-url"),
        ],
    )
    def test_encoding(self, policy, expected):
        assert encode(policy) == Header("Referrer-Policy", expected)

    def test_eight_levels(self):
        assert len(ReferrerPolicy) == 8

    def test_default(self):
        assert ReferrerPolicy.default() is ReferrerPolicy.NO_REFERRER


class TestEncode:
    def test_encoding_is_deterministic(self, google):
        policies = [
            NoSniffPolicy.ENABLE,
            FramePolicy.allow_from(google),
            XSSPolicy.enable_report(google),
            HSTSPolicy.preload(10),
            ExpectCTPolicy.report_and_enforce(30, google),
            ReferrerPolicy.STRICT_ORIGIN,
        ]
        for policy in policies:
            assert encode(policy) == encode(policy)

    def test_every_policy_satisfies_protocol(self):
        for policy in (
            NoSniffPolicy.ENABLE,
            FramePolicy.deny(),
            XSSPolicy.enable(),
            HSTSPolicy.default(),
            ExpectCTPolicy.default(),
            ReferrerPolicy.ORIGIN,
        ):
            assert isinstance(policy, HeaderPolicy)

    def test_policies_are_immutable(self):
        policy = HSTSPolicy.default()
        with pytest.raises(AttributeError):
            policy.max_age = 1  # type: ignore[misc]
