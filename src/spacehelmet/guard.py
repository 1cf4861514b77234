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
"""Transport safety guard: forces HSTS when TLS is served without it.

The guard runs once at startup, before the server accepts connections.
Deploying with TLS outside a development environment while leaving the
``hsts`` slot unset switches on the fallback ``HSTSPolicy.default()`` for
the lifetime of the process.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from spacehelmet.config import Config
from spacehelmet.policy_set import PolicySet
from spacehelmet.properties import ServerProperties

logger = structlog.get_logger("spacehelmet.guard")

DEVELOPMENT_PROFILES = frozenset({"dev", "development"})


@dataclass(frozen=True)
class TransportFacts:
    """What the host server knows about its transport at startup."""

    transport_is_encrypted: bool = False
    is_development: bool = False

    @classmethod
    def from_config(cls, config: Config) -> TransportFacts:
        """Derive the facts from ``spacehelmet.server`` and the active profiles."""
        server = config.bind(ServerProperties)
        return cls(
            transport_is_encrypted=server.tls_enabled,
            is_development=bool(DEVELOPMENT_PROFILES.intersection(config.active_profiles)),
        )


def on_startup(
    policies: PolicySet,
    transport_is_encrypted: bool,
    is_development_environment: bool,
) -> None:
    """Activate the forced HSTS fallback if TLS is served without an HSTS policy."""
    if policies.force_hsts_active:
        return
    if transport_is_encrypted and not is_development_environment and policies.hsts_policy is None:
        fallback = policies.force_hsts_policy
        logger.warning("tls_without_hsts", message="Deploying with TLS without enabling HSTS")
        logger.warning(
            "forcing_default_hsts",
            header=fallback.header_name,
            value=fallback.header_value(),
        )
        logger.warning("hsts_policy_recommended", message="Set an explicit hsts policy")
        policies.activate_force_hsts()


class TransportSafetyGuard:
    """Startup hook binding :func:`on_startup` to fixed transport facts."""

    def __init__(self, facts: TransportFacts | None = None) -> None:
        self._facts = facts or TransportFacts()

    @property
    def facts(self) -> TransportFacts:
        return self._facts

    def on_startup(self, policies: PolicySet) -> None:
        on_startup(
            policies,
            transport_is_encrypted=self._facts.transport_is_encrypted,
            is_development_environment=self._facts.is_development,
        )
