#!/usr/bin/env python3
"""
Command-line interface for unified-deploy-config.

Usage:
    udc resolve --config deploy-config.json5 --target dev-usw2
    udc --config deploy-config.json5 --target dev-usw2
    udc resolve --config deploy-config.json5 --env dev --component network --output flatten
    udc list-environments --config deploy-config.json5 --component network --output list
    udc convert deploy-config.json5 deploy-config.json
"""

import json
import logging
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml
from rich.console import Console
from rich.markup import escape

from .availability import check_availability, list_targets
from .domain import ResolveOptions
from .errors import DeployConfigError
from .loader import convert_document, load_document
from .resolver import resolve_config
from .settings import (
    resolve_branch_name,
    resolve_disable_ephemeral_branch_check,
    resolve_ephemeral_branch_prefix,
    resolve_log_level,
)
from .target import parse_target

# Operator-facing messages go to stderr; stdout carries only results
err_console = Console(stderr=True, soft_wrap=True)


def print_error(msg: str):
    """Print error message."""
    err_console.print(f"[red]Error:[/red] {escape(msg)}", highlight=False)


def print_success(msg: str):
    """Print success message."""
    err_console.print(f"[green]{escape(msg)}[/green]", highlight=False)


def print_debug(msg: str):
    err_console.print(msg, markup=False, highlight=False)


def configure_logging(debug: bool = False):
    logging.basicConfig(
        level=resolve_log_level(debug),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _load(config: str) -> Dict[str, Any]:
    try:
        return load_document(config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print_error(f"Could not load config file {config}: {e}")
        sys.exit(1)


def main():
    """Main entry point."""
    return cli()


class DefaultCommandGroup(click.Group):
    """Group that runs ``default_command`` when no subcommand is named.

    ``udc --config c.json5 --env dev`` is the same as ``udc resolve --config c.json5 --env dev``.
    """

    def __init__(self, *args, default_command: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.default_command = default_command

    def parse_args(self, ctx: click.Context, args):
        if (
            self.default_command
            and args
            and args[0] not in self.commands
            and args[0] not in ctx.help_option_names
            and args[0] != "--version"
        ):
            args = [self.default_command, *args]
        return super().parse_args(ctx, args)


@click.group(cls=DefaultCommandGroup, default_command="resolve")
@click.version_option(version="1.0.0", prog_name="udc")
def cli():
    """Unified Deployment Configuration (UDC) management tool.

    Resolves layered defaults/environment/region deployment configuration
    for a target and reports where components can be deployed.
    """
    pass


@cli.command()
@click.option("--config", "config", required=True, help="Path to the configuration file")
@click.option("--target", help="Target deployment id: environment[-region] (e.g. dev-usw2)")
@click.option("--env", help="Environment name (cannot be used with --target)")
@click.option("--region", help="Region code or name (cannot be used with --target)")
@click.option("--component", help="Component to hoist to root level")
@click.option("--no-hoist", is_flag=True, help="Keep the component nested under its name")
@click.option("--output", type=click.Choice(["json", "flatten"]), default="json", show_default=True,
              help="Output format")
@click.option("--delimiter", default=".", show_default=True, help="Delimiter for flattened output")
@click.option("--terraform", is_flag=True, help="Emit Terraform external data source output")
@click.option("--ephemeral-branch-prefix", help="Prefix for ephemeral branch names [env: UDC_EPHEMERAL_BRANCH_PREFIX]")
@click.option("--disable-ephemeral-branch-check", is_flag=True,
              help="Trust the requested ephemeral name [env: UDC_DISABLE_EPHEMERAL_BRANCH_CHECK]")
@click.option("--branch-name", help="Branch name for ephemeral environments [env: UDC_BRANCH_NAME]")
@click.option("--debug", is_flag=True, help="Enable debug logging and Terraform debug output")
def resolve(
    config: str,
    target: Optional[str],
    env: Optional[str],
    region: Optional[str],
    component: Optional[str],
    no_hoist: bool,
    output: str,
    delimiter: str,
    terraform: bool,
    ephemeral_branch_prefix: Optional[str],
    disable_ephemeral_branch_check: bool,
    branch_name: Optional[str],
    debug: bool,
):
    """Show the resolved configuration for an environment and region.

    Examples:

        udc resolve --config deploy-config.json5 --target dev-usw2

        udc resolve --config deploy-config.json5 --env prod --output flatten --delimiter __

        udc resolve --config deploy-config.json5 --target dev-usw2 --component network --terraform
    """
    configure_logging(debug)

    if target and (env or region):
        print_error("--target cannot be used with --env or --region")
        sys.exit(1)
    if not target and not env:
        print_error("Either --target or --env must be specified")
        sys.exit(1)

    if target:
        parsed = parse_target(target)
        env, region = parsed.env, parsed.region

    options = ResolveOptions(
        env=env,
        region=region,
        component=component,
        hoist=not no_hoist,
        output=output,
        delimiter=delimiter,
        ephemeral_branch_prefix=resolve_ephemeral_branch_prefix(ephemeral_branch_prefix),
        disable_ephemeral_branch_check=resolve_disable_ephemeral_branch_check(disable_ephemeral_branch_check or None),
        branch_name=resolve_branch_name(branch_name),
    )
    run_resolve(config, options, terraform=terraform, debug=debug)


def run_resolve(config: str, options: ResolveOptions, terraform: bool = False, debug: bool = False):
    """Run the resolve command."""
    document = _load(config)
    try:
        result = resolve_config(document, options)
    except DeployConfigError as e:
        print_error(str(e))
        sys.exit(1)

    if not terraform:
        click.echo(json.dumps(result, indent=2))
        return

    if debug:
        write_debug_output(result)

    # Terraform's external data source only accepts string values
    click.echo(json.dumps({"mergedConfig": json.dumps(result)}))


def write_debug_output(result: Dict[str, Any]):
    """Echo the resolved config to stderr and keep a copy in a temp file."""
    rendered = json.dumps(result, indent=2)
    print_debug("=== DEBUG: Merged Configuration ===")
    print_debug(rendered)
    print_debug("=== END DEBUG ===")

    try:
        with tempfile.NamedTemporaryFile(
            mode="w", prefix="merge-config-debug-", suffix=".json", delete=False
        ) as f:
            f.write(rendered)
        print_debug(f"=== DEBUG: Debug file written to {f.name} ===")
    except OSError as e:
        print_debug(f"=== DEBUG: Could not write debug file: {e} ===")


@cli.command("list-environments")
@click.option("--config", "config", required=True, help="Path to the configuration file")
@click.option("--component", help="Component name to check (all components when omitted)")
@click.option("--output", type=click.Choice(["json", "list"]), default="json", show_default=True,
              help="Output format")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def list_environments(config: str, component: Optional[str], output: str, debug: bool):
    """Find environments and regions where components resolve without nulls.

    Examples:

        udc list-environments --config deploy-config.json5

        udc where --config deploy-config.json5 --component network --output list
    """
    configure_logging(debug)
    run_list_environments(config, component, output)


cli.add_command(list_environments, name="where")


def run_list_environments(config: str, component: Optional[str] = None, output: str = "json"):
    """Run the list-environments command."""
    document = _load(config)
    try:
        report = check_availability(document, component)
    except DeployConfigError as e:
        print_error(str(e))
        sys.exit(1)

    if output == "list":
        for target_id in list_targets(report):
            click.echo(target_id)
    else:
        click.echo(json.dumps(report.to_dict(), indent=2))


@cli.command()
@click.argument("input_file", metavar="INPUT")
@click.argument("output_file", metavar="[OUTPUT]", required=False)
@click.option("--minify", is_flag=True, help="Minify the JSON output")
def convert(input_file: str, output_file: Optional[str], minify: bool):
    """Convert a JSON5 (or YAML) config file to standard JSON.

    Writes to OUTPUT when given, otherwise to stdout.
    """
    try:
        rendered = convert_document(input_file, minify=minify)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print_error(f"Error converting file: {e}")
        sys.exit(1)

    if output_file:
        Path(output_file).write_text(rendered + "\n", encoding="utf-8")
        print_success(f"Successfully converted {input_file} to {output_file}")
    else:
        click.echo(rendered)


if __name__ == "__main__":
    main()
