"""Todo board CLI - Main entry point."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .api import TodoClient
from .board import TodoBoard
from .config import settings
from .filters import Tab
from .logging_setup import setup_logging
from .models import Task, TaskFields
from .notify import ConsoleNotifier
from .render import convert_time, format_date, render_page

app = typer.Typer(
    name="todo",
    help="To-do board client for a json-server tasks resource",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    api_url: str = typer.Option(None, "--api-url", help="Base URL of the tasks API"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
):
    """Configure logging and the API endpoint."""
    if api_url:
        settings.api_base_url = api_url
    setup_logging("DEBUG" if verbose else settings.log_level, log_file=settings.log_file)


def _parse_tab(tab: str) -> Tab:
    try:
        return Tab.parse(tab)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


async def _run(action, *, assume_yes: bool = False):
    """Load the board, then hand it to ``action``.

    Returns ``(board, result)``; ``board`` is None when listing failed.
    """
    async with TodoClient() as client:
        board = TodoBoard(client, ConsoleNotifier(console, assume_yes=assume_yes))
        if not await board.load():
            return None, None
        return board, await action(board)


def _load_or_exit(action, *, assume_yes: bool = False):
    board, result = asyncio.run(_run(action, assume_yes=assume_yes))
    if board is None:
        console.print(f"[red]Could not load tasks from {settings.api_base_url}[/red]")
        raise typer.Exit(1)
    return board, result


def _visible(board: TodoBoard, tab: str, search: str | None) -> list[Task]:
    # Searching starts from the All tab and replaces the tab view.
    if search is not None:
        board.focus_search()
        return board.search(search)
    return board.select_tab(_parse_tab(tab))


def _print_tasks(tasks: list[Task]) -> None:
    if not tasks:
        console.print("[dim]No results found[/dim]")
        return

    table = Table(title=f"Tasks ({len(tasks)})")
    table.add_column("ID", style="dim", max_width=24)
    table.add_column("Title", style="cyan")
    table.add_column("Category", style="white")
    table.add_column("Priority", style="yellow")
    table.add_column("Time", style="white")
    table.add_column("Due", style="white")
    table.add_column("Status", style="green")

    for t in tasks:
        time_range = f"{convert_time(t.start_time)} - {convert_time(t.end_time)}".strip(" -")
        table.add_row(
            t.id,
            t.title,
            t.category or "-",
            t.priority or "-",
            time_range or "-",
            format_date(t.due_date) or "-",
            "[green]Completed[/green]" if t.is_completed else "[yellow]Active[/yellow]",
        )

    console.print(table)


@app.command("list")
def list_tasks(
    tab: str = typer.Option("all", "--tab", "-t", help="all, active or completed"),
    search: str = typer.Option(None, "--search", "-s", help="Filter by title or description"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List tasks, newest first."""
    _parse_tab(tab)

    async def _noop(board: TodoBoard):
        return None

    board, _ = _load_or_exit(_noop)
    tasks = _visible(board, tab, search)

    if json_output:
        console.print_json(json.dumps([t.to_dict() for t in tasks]))
    else:
        _print_tasks(tasks)


def _field_options(
    title, description, category, priority, color, start, end, due,
) -> dict[str, str]:
    given = {
        "title": title,
        "description": description,
        "category": category,
        "priority": priority,
        "card_color": color,
        "start_time": start,
        "end_time": end,
        "due_date": due,
    }
    return {k: v for k, v in given.items() if v is not None}


@app.command("add")
def add_task(
    title: str = typer.Option(..., "--title", help="Task title (must be unique)"),
    description: str = typer.Option(None, "--description", "-d"),
    category: str = typer.Option(None, "--category", "-c"),
    priority: str = typer.Option(None, "--priority", "-p"),
    color: str = typer.Option(None, "--color", help="Card colour class"),
    start: str = typer.Option(None, "--start", help="Start time, HH:MM"),
    end: str = typer.Option(None, "--end", help="End time, HH:MM"),
    due: str = typer.Option(None, "--due", help="Due date, YYYY-MM-DD"),
):
    """Create a new task."""
    fields = TaskFields(**_field_options(title, description, category, priority, color, start, end, due))

    async def _add(board: TodoBoard):
        board.open_create()
        return await board.submit_form(fields)

    _, task = _load_or_exit(_add)
    if task is None:
        raise typer.Exit(1)
    console.print(f"[dim]id: {task.id}[/dim]")


@app.command("edit")
def edit_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str = typer.Option(None, "--title"),
    description: str = typer.Option(None, "--description", "-d"),
    category: str = typer.Option(None, "--category", "-c"),
    priority: str = typer.Option(None, "--priority", "-p"),
    color: str = typer.Option(None, "--color"),
    start: str = typer.Option(None, "--start"),
    end: str = typer.Option(None, "--end"),
    due: str = typer.Option(None, "--due"),
):
    """Edit an existing task; omitted options keep their current value."""
    changes = _field_options(title, description, category, priority, color, start, end, due)

    async def _edit(board: TodoBoard):
        if not board.open_edit(task_id):
            return "missing"
        values = {**board.form.values, **changes}
        return await board.submit_form(TaskFields(**values))

    _, result = _load_or_exit(_edit)
    if result == "missing":
        console.print(f"[red]No task with id {task_id}[/red]")
        raise typer.Exit(1)
    if result is None:
        raise typer.Exit(1)


@app.command("complete")
def complete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
):
    """Toggle a task between active and completed."""

    async def _complete(board: TodoBoard):
        if task_id not in board.cache:
            return "missing"
        return await board.complete_task(task_id)

    _, result = _load_or_exit(_complete)
    if result == "missing":
        console.print(f"[red]No task with id {task_id}[/red]")
        raise typer.Exit(1)
    if result is None:
        raise typer.Exit(1)


@app.command("delete")
def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a task."""

    async def _delete(board: TodoBoard):
        if task_id not in board.cache:
            return "missing"
        return await board.delete_task(task_id)

    _, result = _load_or_exit(_delete, assume_yes=yes)
    if result == "missing":
        console.print(f"[red]No task with id {task_id}[/red]")
        raise typer.Exit(1)
    if not result:
        raise typer.Exit(1)


@app.command("export")
def export_board(
    output: Path = typer.Option(Path("board.html"), "--output", "-o", help="HTML file to write"),
    tab: str = typer.Option("all", "--tab", "-t"),
    search: str = typer.Option(None, "--search", "-s"),
):
    """Write the board as a standalone HTML page."""
    _parse_tab(tab)

    async def _noop(board: TodoBoard):
        return None

    board, _ = _load_or_exit(_noop)
    tasks = _visible(board, tab, search)
    html = render_page(tasks, tab=board.tab.value, query=search or "")
    output.write_text(html, encoding="utf-8")
    console.print(f"[green]Wrote {len(tasks)} task(s) to {output}[/green]")


@app.command("serve")
def serve(
    port: int = typer.Option(settings.web_port, "--port", "-p", help="Port to run on"),
    host: str = typer.Option(settings.web_host, "--host", help="Host to bind to"),
):
    """Launch the board web UI."""
    import uvicorn

    console.print(f"[bold cyan]Starting Todo Board at http://{host}:{port}[/bold cyan]")
    uvicorn.run("todo_board.web.app:app", host=host, port=port)


if __name__ == "__main__":
    app()
