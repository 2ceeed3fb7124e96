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
"""'corsflow evaluate' and 'corsflow policy': run the engine from the command line."""

from __future__ import annotations

import json
from pathlib import Path

import click

from corsflow.cli.console import console, err_console, print_header_table
from corsflow.core.config import Config
from corsflow.cors.engine import CorsService
from corsflow.cors.policy import CorsPolicy, CorsProperties
from corsflow.cors.request import CorsRequest
from corsflow.cors.response import to_header_list
from corsflow.kernel.exceptions import CorsFlowException, ValidationError
from corsflow.logging.structlog_adapter import StructlogAdapter

_config_option = click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or TOML file with a corsflow.cors section.",
)
_profile_option = click.option(
    "--profile",
    "profiles",
    multiple=True,
    help="Profile overlay to merge (repeatable).",
)


def _load_policy(config_path: Path, profiles: tuple[str, ...]) -> tuple[Config, CorsPolicy]:
    try:
        config = Config.from_file(config_path, active_profiles=list(profiles))
        return config, config.bind(CorsProperties).to_policy()
    except CorsFlowException as exc:
        err_console.print(f"[error]Error:[/error] {exc}")
        raise SystemExit(1) from exc


@click.command()
@_config_option
@_profile_option
@click.option("--method", required=True, help="HTTP method of the request.")
@click.option("--origin", default=None, help="Origin request header.")
@click.option("--request-method", default=None, help="Access-Control-Request-Method header.")
@click.option(
    "--request-header",
    "request_headers",
    multiple=True,
    help="Access-Control-Request-Headers entry (repeatable).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the response parameters as JSON.")
@click.option("--verbose", is_flag=True, help="Log rejection reasons to stderr.")
def evaluate_command(
    config_path: Path,
    profiles: tuple[str, ...],
    method: str,
    origin: str | None,
    request_method: str | None,
    request_headers: tuple[str, ...],
    as_json: bool,
    verbose: bool,
) -> None:
    """Evaluate one request against the configured CORS policy."""
    config, policy = _load_policy(config_path, profiles)

    try:
        request = CorsRequest(method)
        if origin is not None:
            request = request.with_origin(origin)
        if request_method is not None:
            request = request.with_request_method(request_method)
        if request_headers:
            request = request.with_request_headers(request_headers)
    except ValidationError as exc:
        err_console.print(f"[error]Invalid request:[/error] {exc}")
        raise SystemExit(2) from exc

    logger = None
    if verbose:
        adapter = StructlogAdapter()
        adapter.configure(config)
        logger = adapter.rejection_logger()

    params = CorsService(policy, logger).process(request)

    if as_json:
        click.echo(json.dumps(params))
        return

    kind = "Preflight" if request.is_preflight else "Actual request"
    if not params:
        console.print(f"[warning]{kind} rejected:[/warning] no CORS headers would be sent.")
        return
    print_header_table(f"{kind} allowed", to_header_list(params))


@click.command()
@_config_option
@_profile_option
def policy_command(config_path: Path, profiles: tuple[str, ...]) -> None:
    """Show the effective CORS policy."""
    _, policy = _load_policy(config_path, profiles)

    rows = [
        ("allow_origins", ", ".join(policy.allow_origins) or "-"),
        ("allow_methods", ", ".join(policy.allow_methods) or "-"),
        ("allow_headers", ", ".join(policy.allow_headers) or "-"),
        ("expose_headers", ", ".join(policy.expose_headers) or "-"),
        ("allow_credentials", str(policy.allow_credentials).lower()),
        ("max_age", str(policy.max_age)),
    ]
    print_header_table("CORS policy", rows, key_label="Option")
    if policy.allow_credentials and policy.is_wildcard:
        console.print("[warning]Credentials are never granted with a wildcard origin.[/warning]")
