"""Health route for the todo board."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...board import TodoBoard
from ..deps import get_board

router = APIRouter()


@router.get("/health")
async def health_check(board: TodoBoard = Depends(get_board)):
    return {
        "status": "healthy",
        "service": "todo-board",
        "tasks_loaded": board.load_error is None,
        "task_count": len(board.cache),
    }
