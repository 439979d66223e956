"""
AgentFund CLI

Operator command line for the AgentFund MCP server.

Nothing here holds keys.  Transaction requests are printed for a funder's
wallet to sign.

Commands:
  serve      - Run the MCP server on stdio
  tools      - List the tools exposed to agents
  call       - Invoke one tool and print its payload
  cancel-tx  - Print an unsigned cancelProject request
  info       - Show network and configuration
"""

from __future__ import annotations

import json
import sys
from typing import Optional

import click

from .chain import ChainClient
from .config import NETWORK_NAME, Settings
from .errors import AgentFundError
from .log import configure_logging
from .tools import ToolDispatcher, error_result
from .tools.handlers import generate_cancel_request
from .tools.schemas import parse_project_id


# ============ Constants ============

VERSION = "1.0.0"


# ============ Banner ============


def _print_banner() -> None:
    click.echo(
        click.style("  ◆ ", fg="cyan")
        + click.style("A G E N T F U N D", fg="bright_white", bold=True)
        + click.style(f"  v{VERSION}", dim=True)
    )
    click.echo()


# ============ Dispatcher construction ============


def build_dispatcher(settings: Settings) -> ToolDispatcher:
    return ToolDispatcher(ChainClient(settings), settings)


def _load_settings(rpc_url: Optional[str], log_level: Optional[str]) -> Settings:
    try:
        settings = Settings.from_env(rpc_url=rpc_url)
    except AgentFundError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)
    configure_logging((log_level or settings.log_level).upper())
    return settings


rpc_option = click.option(
    "--rpc-url",
    envvar="BASE_RPC_URL",
    default=None,
    help="Base Mainnet RPC URL",
)
log_level_option = click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (stderr)",
)


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="agentfund")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """AgentFund: milestone escrow tools for AI agents."""
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


@cli.command()
@rpc_option
@log_level_option
def serve(rpc_url: Optional[str], log_level: Optional[str]) -> None:
    """Run the MCP server on stdio."""
    from .server import serve as run_server

    settings = _load_settings(rpc_url, log_level)
    run_server(settings)


@cli.command("tools")
@click.option("--json", "as_json", is_flag=True, help="Print full tool schemas as JSON")
def list_tools(as_json: bool) -> None:
    """List the tools exposed to agents."""
    dispatcher = build_dispatcher(Settings())
    specs = dispatcher.list_tools()

    if as_json:
        click.echo(json.dumps([spec.to_dict() for spec in specs], indent=2))
        return

    for spec in specs:
        required = ", ".join(spec.required) or "none"
        click.echo(
            click.style(spec.name, fg="bright_white", bold=True)
            + click.style(f"  (required: {required})", dim=True)
        )
        click.echo(f"  {spec.description}")


@cli.command()
@click.argument("tool")
@click.option("--args", "args_json", default="{}", help="Tool arguments as a JSON object")
@rpc_option
@log_level_option
def call(tool: str, args_json: str, rpc_url: Optional[str], log_level: Optional[str]) -> None:
    """Invoke one tool and print its payload."""
    try:
        arguments = json.loads(args_json)
    except json.JSONDecodeError as exc:
        click.secho(f"ERROR: Invalid args: {exc}", fg="red", err=True)
        sys.exit(1)

    settings = _load_settings(rpc_url, log_level)
    result = build_dispatcher(settings).dispatch(tool, arguments)

    click.echo(result.text)
    if result.is_error:
        sys.exit(1)


@cli.command("cancel-tx")
@click.argument("project_id")
@rpc_option
@log_level_option
def cancel_tx(project_id: str, rpc_url: Optional[str], log_level: Optional[str]) -> None:
    """
    Print an unsigned cancelProject request.

    The funder signs it in their own wallet; the remaining escrow is refunded.
    """
    settings = _load_settings(rpc_url, log_level)
    dispatcher = build_dispatcher(settings)
    try:
        text = generate_cancel_request(dispatcher.context, parse_project_id(project_id))
    except Exception as exc:
        result = error_result(exc)
        click.echo(result.text)
        sys.exit(exc.exit_code if isinstance(exc, AgentFundError) else 1)
    click.echo(text)


@cli.command()
@rpc_option
def info(rpc_url: Optional[str]) -> None:
    """Show network and configuration."""
    _print_banner()
    settings = _load_settings(rpc_url, None)

    click.secho("  Network ────────────────────────────────", fg="cyan")
    click.echo()
    rows = [
        ("Network:    ", f"{NETWORK_NAME} (chain id {settings.chain_id})"),
        ("Contract:   ", settings.contract_address),
        ("RPC:        ", settings.rpc_url),
        ("Scan limit: ", str(settings.scan_limit)),
    ]
    for label, value in rows:
        click.echo(click.style(f"  {label}", dim=True) + click.style(value, fg="bright_white"))
    click.echo()

    click.secho("  Tools ──────────────────────────────────", fg="cyan")
    click.echo()
    for spec in build_dispatcher(settings).list_tools():
        click.echo(click.style("  ◇ ", fg="cyan") + spec.name)
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """AgentFund CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    cli()


if __name__ == "__main__":
    main()
