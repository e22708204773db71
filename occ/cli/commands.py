"""CLI commands for occ."""

import sys
from pathlib import Path
from typing import NoReturn

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from occ import __logo__, __version__
from occ.cli.formatting import (
    print_clone_result,
    print_edit_result,
    print_json,
    print_restore_result,
    print_session_info,
    print_session_list,
)
from occ.config.loader import load_config
from occ.config.presets import ToolRemovalOptions, available_presets
from occ.config.schema import Config
from occ.errors import AgentNotFoundError, OccError
from occ.operations import (
    CloneOptions,
    EditOptions,
    execute_clone,
    execute_edit,
    execute_restore,
    get_session_info,
    list_sessions,
)

app = typer.Typer(
    name="occ",
    help=f"{__logo__} occ - OpenClaw Context Cleaner",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

QUICKSTART_TEXT = """\
occ - OpenClaw Context Cleaner

WHEN TO USE:
  Running low on context? Clean up old tool calls to keep working.

PRESETS:
  default     Keep 20 recent turns with tools, truncate half
  aggressive  Keep 10 recent turns, truncate half
  extreme     Remove all tool calls

COMMON COMMANDS:
  occ edit --strip-tools                Edit current session (auto-detect)
  occ edit abc123 --preset aggressive   Edit specific session
  occ clone <id> --strip-tools          Clone instead of edit
  occ list                              Show available sessions
  occ info <id>                         Analyze session before cleaning
  occ restore <id>                      Undo last edit from backup

FLAGS:
  --json       Machine-readable output
  --verbose    Detailed statistics
  --help       Full documentation

WHAT HAPPENS:
  - Removes/truncates tool calls based on preset
  - Removes thinking blocks
  - Registers new session in OpenClaw (clone only)"""

ERROR_HINTS = {
    "SESSION_NOT_FOUND": "Use 'occ list' to see available sessions",
    "AMBIGUOUS_SESSION": "Provide more characters of the session ID to disambiguate",
    "NO_SESSIONS": "No sessions exist for this agent. Check --agent or run a session first.",
    "AGENT_NOT_FOUND": "Check the agent ID or omit --agent to use the default",
    "EDIT_FAILED": "Check file permissions and disk space. The original session is unchanged.",
    "CLONE_FAILED": "Check file permissions and disk space. The source session is unchanged.",
    "RESTORE_FAILED": "No backup available for this session",
    "PARSE_FAILED": "Unset strictParsing to skip corrupt lines",
}


def _stderr_sink(message) -> None:
    sys.stderr.write(message)


def configure_logging(verbose: bool) -> None:
    """Warnings only by default, everything with --verbose."""
    logger.remove()
    logger.add(
        _stderr_sink,
        level="DEBUG" if verbose else "WARNING",
        format="<level>{level: <8}</level> {message}",
    )


def fail(error: OccError, config: Config, json_output: bool = False) -> NoReturn:
    """Report an error with its hint and exit with status 1."""
    if json_output:
        print_json({"success": False, "error": error.message, "code": error.code})
        raise typer.Exit(1)

    err_console.print(f"[red]Error: {escape(error.message)}[/red]")
    if isinstance(error, AgentNotFoundError) and error.available_agents:
        err_console.print(f"[dim]Available agents: {', '.join(error.available_agents)}[/dim]")
    if error.code == "UNKNOWN_PRESET":
        presets = ", ".join(available_presets(config.custom_presets))
        err_console.print(f"[dim]Hint: Valid presets are: {presets}[/dim]")
    elif error.code in ERROR_HINTS:
        err_console.print(f"[dim]Hint: {ERROR_HINTS[error.code]}[/dim]")
    raise typer.Exit(1)


def _tool_removal(
    config: Config,
    strip_tools: bool,
    preset: str | None,
    keep: int | None,
    truncate: float | None,
) -> ToolRemovalOptions | None:
    if not (strip_tools or preset or keep is not None or truncate is not None):
        return None
    return ToolRemovalOptions(
        preset=preset or config.preset,
        keep_turns_with_tools=keep,
        truncate_percent=truncate,
        custom_presets=config.custom_presets,
    )


def _command_setup(ctx: typer.Context, json_output: bool, verbose: bool) -> tuple[Config, bool, bool]:
    config: Config = ctx.obj
    verbose = verbose or config.verbose
    if verbose:
        configure_logging(True)
    return config, json_output or config.output_format == "json", verbose


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} occ v{__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
    quickstart: bool = typer.Option(False, "--quickstart", help="Show condensed agent-friendly help"),
    config_path: Path = typer.Option(None, "--config", help="Config file (default: auto-detect)"),
):
    """occ - Clean tool calls and thinking out of OpenClaw session transcripts."""
    configure_logging(False)
    ctx.obj = load_config(config_path)
    if ctx.obj.verbose:
        configure_logging(True)

    if quickstart:
        typer.echo(QUICKSTART_TEXT)
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


# ============================================================================
# Edit / Clone
# ============================================================================


@app.command()
def edit(
    ctx: typer.Context,
    session_id: str = typer.Argument(None, help="Session ID or prefix (default: most recent)"),
    strip_tools: bool = typer.Option(False, "--strip-tools", help="Strip tool calls using the configured preset"),
    preset: str = typer.Option(None, "--preset", "-p", help="Preset to strip with (default, aggressive, extreme)"),
    keep: int = typer.Option(None, "--keep", min=0, help="Tool-bearing turns to keep"),
    truncate: float = typer.Option(None, "--truncate", min=0, max=100, help="Percent of kept turns to truncate"),
    agent: str = typer.Option(None, "--agent", "-a", help="Agent ID (default: config or 'main')"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    verbose: bool = typer.Option(False, "--verbose", help="Show detailed statistics"),
):
    """Edit a session in place with automatic backup."""
    config, json_output, verbose = _command_setup(ctx, json_output, verbose)

    options = EditOptions(
        session_id=session_id,
        agent_id=agent,
        tool_removal=_tool_removal(config, strip_tools, preset, keep, truncate),
    )
    try:
        result = execute_edit(config, options)
    except OccError as e:
        fail(e, config, json_output)

    if json_output:
        print_json(result.to_dict())
    else:
        print_edit_result(console, result, verbose)


@app.command()
def clone(
    ctx: typer.Context,
    session_id: str = typer.Argument(..., help="Source session ID or prefix"),
    strip_tools: bool = typer.Option(False, "--strip-tools", help="Strip tool calls using the configured preset"),
    preset: str = typer.Option(None, "--preset", "-p", help="Preset to strip with (default, aggressive, extreme)"),
    keep: int = typer.Option(None, "--keep", min=0, help="Tool-bearing turns to keep"),
    truncate: float = typer.Option(None, "--truncate", min=0, max=100, help="Percent of kept turns to truncate"),
    output: str = typer.Option(None, "--output", "-o", help="Write the clone here instead of the sessions dir"),
    no_register: bool = typer.Option(False, "--no-register", help="Do not add the clone to the session index"),
    agent: str = typer.Option(None, "--agent", "-a", help="Agent ID (default: config or 'main')"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    verbose: bool = typer.Option(False, "--verbose", help="Show detailed statistics"),
):
    """Clone a session to a new session file."""
    config, json_output, verbose = _command_setup(ctx, json_output, verbose)

    options = CloneOptions(
        source_session_id=session_id,
        agent_id=agent,
        output_path=output,
        tool_removal=_tool_removal(config, strip_tools, preset, keep, truncate),
        no_register=no_register,
    )
    try:
        result = execute_clone(config, options)
    except OccError as e:
        fail(e, config, json_output)

    if json_output:
        print_json(result.to_dict())
    else:
        print_clone_result(console, result, verbose)


# ============================================================================
# Inspection
# ============================================================================


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    limit: int = typer.Option(None, "--limit", "-n", help="Show at most N sessions"),
    agent: str = typer.Option(None, "--agent", "-a", help="Agent ID (default: config or 'main')"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List sessions, most recent first."""
    config, json_output, _ = _command_setup(ctx, json_output, False)

    try:
        sessions = list_sessions(config, agent, limit)
    except OccError as e:
        fail(e, config, json_output)

    if json_output:
        print_json(sessions)
    else:
        print_session_list(console, sessions)


@app.command()
def info(
    ctx: typer.Context,
    session_id: str = typer.Argument(..., help="Session ID or prefix"),
    agent: str = typer.Option(None, "--agent", "-a", help="Agent ID (default: config or 'main')"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show session statistics."""
    config, json_output, _ = _command_setup(ctx, json_output, False)

    try:
        session_info = get_session_info(config, session_id, agent)
    except OccError as e:
        fail(e, config, json_output)

    if json_output:
        print_json(session_info.to_dict())
    else:
        print_session_info(console, session_info)


@app.command()
def restore(
    ctx: typer.Context,
    session_id: str = typer.Argument(..., help="Session ID or prefix"),
    agent: str = typer.Option(None, "--agent", "-a", help="Agent ID (default: config or 'main')"),
):
    """Restore a session from its latest backup."""
    config: Config = ctx.obj

    try:
        result = execute_restore(config, session_id, agent)
    except OccError as e:
        fail(e, config)

    print_restore_result(console, result)


if __name__ == "__main__":
    app()
