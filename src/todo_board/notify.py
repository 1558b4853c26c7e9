"""Notification collaborators: toasts, alerts and confirmations."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm


class ToastKind(str, Enum):
    SUCCESS = "success"
    UPDATED = "updated"
    DELETED = "deleted"


class Notifier(Protocol):
    def toast(self, message: str, kind: ToastKind = ToastKind.SUCCESS) -> None: ...

    def alert(self, message: str) -> None: ...

    async def confirm(self, message: str) -> bool: ...


class RecordingNotifier:
    """Keeps notifications in memory until they are drained.

    Confirmations are answered with ``confirm_answer``; the web UI asks the
    user in the browser before posting, so it confirms unconditionally.
    """

    def __init__(self, confirm_answer: bool = True):
        self.confirm_answer = confirm_answer
        self.toasts: list[tuple[str, ToastKind]] = []
        self.alerts: list[str] = []
        self.confirmations: list[str] = []

    def toast(self, message: str, kind: ToastKind = ToastKind.SUCCESS) -> None:
        self.toasts.append((message, ToastKind(kind)))

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    async def confirm(self, message: str) -> bool:
        self.confirmations.append(message)
        return self.confirm_answer

    def drain(self) -> tuple[list[tuple[str, str]], list[str]]:
        """Return pending toasts (as plain strings) and alerts, then clear them."""
        toasts = [(message, kind.value) for message, kind in self.toasts]
        alerts = list(self.alerts)
        self.toasts.clear()
        self.alerts.clear()
        return toasts, alerts


_TOAST_STYLES = {
    ToastKind.SUCCESS: "green",
    ToastKind.UPDATED: "cyan",
    ToastKind.DELETED: "yellow",
}


class ConsoleNotifier:
    """Rich console rendition for the CLI."""

    def __init__(self, console: Console | None = None, assume_yes: bool = False):
        self.console = console or Console()
        self.assume_yes = assume_yes

    def toast(self, message: str, kind: ToastKind = ToastKind.SUCCESS) -> None:
        style = _TOAST_STYLES.get(ToastKind(kind), "white")
        self.console.print(f"[{style}]{escape(message)}[/{style}]")

    def alert(self, message: str) -> None:
        self.console.print(Panel(f"[red]{escape(message)}[/red]", title="Notice"))

    async def confirm(self, message: str) -> bool:
        if self.assume_yes:
            return True
        return await asyncio.to_thread(Confirm.ask, escape(message), console=self.console)
