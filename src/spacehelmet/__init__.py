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
"""Space Helmet: typed HTTP security headers for ASGI applications.

Space Helmet adds browser security headers to every response, with sane
defaults and a typed policy per header::

    from starlette.applications import Starlette
    from starlette.middleware import Middleware

    from spacehelmet import HSTSPolicy, PolicySet, SecurityHeadersMiddleware

    policies = PolicySet().hsts(HSTSPolicy.default())
    app = Starlette(middleware=[Middleware(SecurityHeadersMiddleware, policies=policies)])

=============================================  ===================
Header                                         Enabled by default
=============================================  ===================
X-XSS-Protection (``xss_protect``)             yes
X-Content-Type-Options (``no_sniff``)          yes
X-Frame-Options (``frameguard``)               yes
Strict-Transport-Security (``hsts``)           forced under TLS
Expect-CT (``expect_ct``)                      no
Referrer-Policy (``referrer``)                 no
=============================================  ===================

If TLS is enabled outside a development profile and no HSTS policy is set,
the default HSTS policy is forced and a warning is logged at startup.
"""

from spacehelmet.adapters.starlette import SecurityHeadersMiddleware
from spacehelmet.config import Config
from spacehelmet.engine import DictHeaderSink, HeaderSink, apply_policies
from spacehelmet.errors import HelmetException, InvalidUriError, PolicyConfigurationError
from spacehelmet.guard import TransportFacts, TransportSafetyGuard, on_startup
from spacehelmet.policy import (
    EXPECT_CT_MAX_AGE_DEFAULT,
    HSTS_MAX_AGE_DEFAULT,
    ExpectCTPolicy,
    FramePolicy,
    Header,
    HeaderPolicy,
    HSTSPolicy,
    NoSniffPolicy,
    ReferrerPolicy,
    XSSPolicy,
    encode,
)
from spacehelmet.policy_set import HeaderSlot, PolicySet
from spacehelmet.uri import Uri

__version__ = "0.1.0"

__all__ = [
    "EXPECT_CT_MAX_AGE_DEFAULT",
    "HSTS_MAX_AGE_DEFAULT",
    "Config",
    "DictHeaderSink",
    "ExpectCTPolicy",
    "FramePolicy",
    "HSTSPolicy",
    "Header",
    "HeaderPolicy",
    "HeaderSink",
    "HeaderSlot",
    "HelmetException",
    "InvalidUriError",
    "NoSniffPolicy",
    "PolicyConfigurationError",
    "PolicySet",
    "ReferrerPolicy",
    "SecurityHeadersMiddleware",
    "TransportFacts",
    "TransportSafetyGuard",
    "Uri",
    "XSSPolicy",
    "__version__",
    "apply_policies",
    "encode",
    "on_startup",
]
