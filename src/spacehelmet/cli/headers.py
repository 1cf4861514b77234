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
"""'spacehelmet headers': preview the headers a configuration emits."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import click
from rich.table import Table

from spacehelmet.cli.console import console
from spacehelmet.config import Config
from spacehelmet.engine import DictHeaderSink, apply_policies
from spacehelmet.guard import TransportFacts, TransportSafetyGuard
from spacehelmet.logging import StructlogAdapter
from spacehelmet.properties import HeadersProperties


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML or TOML configuration file.",
)
@click.option("--profile", "profiles", multiple=True, help="Active profile (repeatable).")
@click.option("--tls", is_flag=True, help="Treat the server as serving TLS regardless of its settings.")
def headers_command(config_path: Path | None, profiles: tuple[str, ...], tls: bool) -> None:
    """Show the security headers added to every response."""
    active_profiles = list(profiles) or None
    if config_path is not None:
        config = Config.from_file(config_path, active_profiles=active_profiles)
    else:
        config = Config.defaults(active_profiles=active_profiles)

    StructlogAdapter().configure(config)

    try:
        policies = config.bind(HeadersProperties).to_policy_set()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    facts = TransportFacts.from_config(config)
    if tls:
        facts = dataclasses.replace(facts, transport_is_encrypted=True)
    TransportSafetyGuard(facts).on_startup(policies)

    sink = DictHeaderSink()
    apply_policies(policies, sink)

    table = Table(title="Response Headers", border_style="dim")
    table.add_column("Header", style="info", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for name, value in sink.as_dict().items():
        table.add_row(name, value)
    console.print(table)

    tls_label = "[success]enabled[/success]" if facts.transport_is_encrypted else "[dim]disabled[/dim]"
    console.print(f"TLS: {tls_label}")
    if policies.force_hsts_active:
        console.print("[warning]HSTS forced with the default policy; configure spacehelmet.headers.hsts[/warning]")
