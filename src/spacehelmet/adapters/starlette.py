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
"""Pure ASGI security headers middleware for Starlette."""

from __future__ import annotations

from typing import Any

from starlette.datastructures import MutableHeaders
from starlette.middleware import Middleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from spacehelmet.config import Config
from spacehelmet.engine import apply_policies
from spacehelmet.guard import TransportFacts, TransportSafetyGuard
from spacehelmet.policy_set import PolicySet
from spacehelmet.properties import HeadersProperties


class MutableHeadersSink:
    """Adapts Starlette's ``MutableHeaders`` to the engine's ``HeaderSink``."""

    __slots__ = ("_headers",)

    def __init__(self, headers: MutableHeaders) -> None:
        self._headers = headers

    def has_header(self, name: str) -> bool:
        return name in self._headers

    def set_header(self, name: str, value: str) -> None:
        self._headers[name] = value


class SecurityHeadersMiddleware:
    """Adds the configured security headers to every HTTP response.

    The transport safety guard runs when the application receives
    ``lifespan.startup``, before the server starts accepting connections.
    Uses raw ASGI protocol instead of ``BaseHTTPMiddleware`` so headers are
    written on ``http.response.start`` without buffering the body.
    """

    def __init__(
        self,
        app: ASGIApp,
        policies: PolicySet | None = None,
        facts: TransportFacts | None = None,
    ) -> None:
        self.app = app
        self._policies = policies or PolicySet()
        self._guard = TransportSafetyGuard(facts)

    @property
    def policies(self) -> PolicySet:
        return self._policies

    @classmethod
    def from_config(cls, config: Config) -> Middleware:
        """Build a ``Middleware`` entry wired from ``spacehelmet.*`` configuration."""
        policies = config.bind(HeadersProperties).to_policy_set()
        return Middleware(cls, policies=policies, facts=TransportFacts.from_config(config))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self.app(scope, self._lifespan_receive(receive), send)
            return

        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        policies = self._policies

        async def send_with_headers(message: Message) -> None:
            if message["type"] == "http.response.start":
                apply_policies(policies, MutableHeadersSink(MutableHeaders(scope=message)))
            await send(message)

        await self.app(scope, receive, send_with_headers)

    def _lifespan_receive(self, receive: Receive) -> Receive:
        async def receive_with_guard() -> Any:
            message = await receive()
            if message["type"] == "lifespan.startup":
                self._guard.on_startup(self._policies)
            return message

        return receive_with_guard
