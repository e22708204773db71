"""Human and JSON rendering of command results."""

import json
import time
from datetime import datetime
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from occ.operations.types import CloneResult, EditResult, RestoreResult, SessionInfo


def format_file_size(size: int) -> str:
    """Human-readable size: B, KB or MB with one decimal."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def format_percent(value: float) -> str:
    return f"{round(value)}%"


def format_relative_time(timestamp_ms: float, now_ms: float | None = None) -> str:
    """Relative age of a millisecond timestamp, or a date once a week old."""
    if now_ms is None:
        now_ms = time.time() * 1000

    seconds = int((now_ms - timestamp_ms) // 1000)
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if seconds < 60:
        return "just now"
    if minutes < 60:
        return f"{minutes} minute{'' if minutes == 1 else 's'} ago"
    if hours < 24:
        return f"{hours} hour{'' if hours == 1 else 's'} ago"
    if days < 7:
        return f"{days} day{'' if days == 1 else 's'} ago"
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d")


def truncate_session_id(session_id: str, length: int = 12) -> str:
    if len(session_id) <= length:
        return session_id
    return f"{session_id[:length]}..."


def print_json(data: Any) -> None:
    # Plain echo: rich would wrap long lines
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _message_reduction(original: int, after: int) -> float:
    if original <= 0:
        return 0.0
    return (original - after) / original * 100


def print_edit_result(console: Console, result: EditResult, verbose: bool = False) -> None:
    stats = result.statistics
    console.print(f"[green]✓[/green] Session edited: [cyan]{result.session_id}[/cyan]")
    console.print(
        f"  Messages: {stats.messages_original} → {stats.messages_after} "
        f"({format_percent(_message_reduction(stats.messages_original, stats.messages_after))} reduction)"
    )
    console.print(
        f"  Tool calls: {stats.tool_calls_removed} removed, "
        f"{stats.tool_calls_truncated} truncated, {stats.tool_calls_preserved} preserved"
    )
    console.print(
        f"  Size: {format_file_size(stats.size_original)} → {format_file_size(stats.size_after)} "
        f"({format_percent(stats.reduction_percent)} reduction)"
    )
    console.print(f"  Backup: [dim]{escape(result.backup_path)}[/dim]")

    if verbose:
        console.print(_statistics_table(result.to_dict()["statistics"]))


def print_clone_result(console: Console, result: CloneResult, verbose: bool = False) -> None:
    stats = result.statistics
    console.print(
        f"[green]✓[/green] Session cloned: [cyan]{result.source_session_id}[/cyan] → "
        f"[cyan]{result.cloned_session_id}[/cyan]"
    )
    console.print(f"  Messages: {stats.messages_original} → {stats.messages_after}")
    console.print(
        f"  Tool calls: {stats.tool_calls_removed} removed, "
        f"{stats.tool_calls_truncated} truncated, {stats.tool_calls_preserved} preserved"
    )
    console.print(
        f"  Size: {format_file_size(stats.size_original)} → {format_file_size(stats.size_after)} "
        f"({format_percent(stats.reduction_percent)} reduction)"
    )
    console.print(f"  Path: [dim]{escape(result.cloned_session_path)}[/dim]")
    if result.resume_command:
        console.print(f"  Resume: [bold]{result.resume_command}[/bold]")

    if verbose:
        console.print(_statistics_table(result.to_dict()["statistics"]))


def _statistics_table(stats: dict[str, Any]) -> Table:
    table = Table(title="Statistics", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for key, value in stats.items():
        if key.startswith("size"):
            shown = format_file_size(value)
        elif key == "reductionPercent":
            shown = format_percent(value)
        else:
            shown = str(value)
        table.add_row(key, shown)
    return table


def print_session_list(console: Console, sessions: list[dict[str, Any]]) -> None:
    if not sessions:
        console.print("[yellow]No sessions found.[/yellow]")
        return

    table = Table(title="Sessions")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Updated")
    table.add_column("Project", style="dim")

    for session in sessions:
        table.add_row(
            truncate_session_id(str(session.get("sessionId", ""))),
            format_relative_time(session.get("updatedAt", 0)),
            escape(session.get("projectPath") or session.get("cwd") or ""),
        )

    console.print(table)


def print_session_info(console: Console, info: SessionInfo) -> None:
    table = Table(title=f"Session {info.session_id}", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Total messages", str(info.total_messages))
    table.add_row("User messages", str(info.user_messages))
    table.add_row("Assistant messages", str(info.assistant_messages))
    table.add_row("Tool calls", str(info.tool_calls))
    table.add_row("Tool results", str(info.tool_results))
    table.add_row("Estimated tokens", f"{info.estimated_tokens:,}")
    table.add_row("File size", format_file_size(info.file_size_bytes))

    console.print(table)


def print_restore_result(console: Console, result: RestoreResult) -> None:
    console.print(f"[green]✓[/green] Session '{result.session_id}' restored from backup")
    console.print(f"  From: [dim]{escape(result.backup_path)}[/dim]")
