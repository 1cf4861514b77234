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
"""Tests for the validated Uri value type."""

from __future__ import annotations

import dataclasses

import pytest

from spacehelmet.errors import InvalidUriError
from spacehelmet.uri import Uri


class TestUriParse:
    def test_absolute_uri(self):
        uri = Uri.parse("https://www.google.com")
        assert str(uri) == "https://www.google.com"

    def test_absolute_uri_with_path_query_and_port(self):
        uri = Uri.parse("https://reports.example.com:8443/csp?site=main")
        assert str(uri) == "https://reports.example.com:8443/csp?site=main"

    def test_origin_form_path(self):
        assert str(Uri.parse("/report")) == "/report"

    def test_equal_values_are_equal_and_hashable(self):
        assert Uri.parse("https://a.example") == Uri.parse("https://a.example")
        assert len({Uri.parse("https://a.example"), Uri.parse("https://a.example")}) == 1

    def test_repr(self):
        assert repr(Uri.parse("https://a.example")) == "Uri('https://a.example')"


class TestUriRejects:
    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "www.google.com",
            "https://",
            "https://exa mple.com",
            'https://example.com/"quoted"',
            "https://example.com/\r\nX-Injected: 1",
            "//example.com/path",
            "1http://example.com",
            "https://example.com:notaport",
        ],
    )
    def test_malformed_uri_raises(self, raw):
        with pytest.raises(InvalidUriError):
            Uri.parse(raw)

    def test_non_string_raises(self):
        with pytest.raises(InvalidUriError):
            Uri.parse(42)  # type: ignore[arg-type]

    def test_error_carries_code_and_context(self):
        with pytest.raises(InvalidUriError) as exc_info:
            Uri.parse("not a uri")
        assert exc_info.value.code == "INVALID_URI"
        assert exc_info.value.context["uri"] == "not a uri"

    def test_invalid_uri_is_a_value_error(self):
        with pytest.raises(ValueError):
            Uri.parse("")

    def test_direct_construction_is_rejected(self):
        with pytest.raises(TypeError):
            Uri("https://www.google.com")

    def test_replace_cannot_smuggle_unchecked_value(self):
        uri = Uri.parse("https://www.google.com")
        with pytest.raises(TypeError):
            dataclasses.replace(uri, value="not a uri")
