"""HTML rendering of the task list.

Rendering is a pure function of its input: the same tasks always produce the
same markup. Every user-supplied field is escaped by Jinja2's autoescaping.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import settings
from .models import Task


def convert_time(time_str: str | None) -> str:
    """``"13:30"`` -> ``"1:30 PM"``; ``"00:15"`` -> ``"12:15 AM"``."""
    if not time_str:
        return ""
    hour_part, _, minutes = time_str.partition(":")
    if not hour_part.strip().isdigit():
        return time_str
    hour = int(hour_part)
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minutes} {suffix}"


def format_date(date: str | None) -> str:
    """Reverse the dash-separated segments: ``2024-05-01`` -> ``01-05-2024``."""
    if not date:
        return ""
    return "-".join(reversed(date.split("-")))


def capitalise_first_letter(text: str | None) -> str:
    return text[0].upper() + text[1:] if text else ""


def install_filters(env: Environment) -> Environment:
    env.filters["convert_time"] = convert_time
    env.filters["format_date"] = format_date
    env.filters["capitalise"] = capitalise_first_letter
    return env


_env = install_filters(
    Environment(
        loader=FileSystemLoader(str(settings.templates_dir)),
        autoescape=select_autoescape(["html"]),
        keep_trailing_newline=True,
    )
)


def render_tasks(tasks: Iterable[Task]) -> str:
    """One card per task in input order, or the empty-state placeholder."""
    return _env.get_template("partials/task_list.html").render(tasks=list(tasks))


def render_page(
    tasks: Sequence[Task],
    *,
    tab: str = "all",
    query: str = "",
    form: dict[str, Any] | None = None,
    toasts: Sequence[tuple[str, str]] = (),
    alerts: Sequence[str] = (),
    load_error: bool = False,
    title: str | None = None,
) -> str:
    """Full standalone board page (tabs, search box, list, toasts, form)."""
    return _env.get_template("board.html").render(
        **page_context(
            tasks,
            tab=tab,
            query=query,
            form=form,
            toasts=toasts,
            alerts=alerts,
            load_error=load_error,
            title=title,
        )
    )


def page_context(
    tasks: Sequence[Task],
    *,
    tab: str = "all",
    query: str = "",
    form: dict[str, Any] | None = None,
    toasts: Sequence[tuple[str, str]] = (),
    alerts: Sequence[str] = (),
    load_error: bool = False,
    title: str | None = None,
) -> dict[str, Any]:
    return {
        "app_title": title or settings.app_title,
        "tasks": list(tasks),
        "tab": tab,
        "query": query,
        "form": form,
        "toasts": list(toasts),
        "alerts": list(alerts),
        "load_error": load_error,
        "tabs": ("all", "active", "completed"),
        "toast_icons": TOAST_ICONS,
    }


TOAST_ICONS = {
    "success": "fa-solid fa-circle-check",
    "updated": "fa-solid fa-bullhorn",
    "deleted": "fa-solid fa-circle-exclamation",
}
