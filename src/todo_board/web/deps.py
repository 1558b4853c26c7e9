"""Request dependencies for the web UI."""

from __future__ import annotations

from fastapi import Request

from ..board import TodoBoard


def get_board(request: Request) -> TodoBoard:
    """The single board session held by the running app."""
    return request.app.state.board
