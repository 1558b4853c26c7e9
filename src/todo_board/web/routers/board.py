"""Board page, list fragment and task/form actions.

Every action redirects back to the board; toasts and alerts raised by the
action are shown on the next page render.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ...board import TodoBoard
from ...config import settings
from ...filters import Tab
from ...models import TaskFields
from ...render import install_filters, page_context
from ..deps import get_board

router = APIRouter(tags=["board"])
templates = Jinja2Templates(directory=str(settings.templates_dir))
install_filters(templates.env)


def _back_to_board() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


def _apply_view(board: TodoBoard, tab: str | None, q: str | None) -> None:
    # The search box and the tabs are not combined: a query replaces the tab view.
    if q is not None:
        board.focus_search()
        board.search(q)
        return
    try:
        board.select_tab(Tab.parse(tab))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/", response_class=HTMLResponse)
async def board_page(
    request: Request,
    tab: str | None = None,
    q: str | None = None,
    board: TodoBoard = Depends(get_board),
):
    _apply_view(board, tab, q)
    toasts, alerts = board.notifier.drain()
    context = page_context(
        board.visible_tasks,
        tab=board.tab.value,
        query=q or "",
        form=board.form.as_context() if board.form.is_open else None,
        toasts=toasts,
        alerts=alerts,
        load_error=board.load_error is not None,
    )
    return templates.TemplateResponse(request, "board.html", context)


@router.get("/partials/tasks", response_class=HTMLResponse)
async def task_list(
    tab: str | None = None,
    q: str | None = None,
    board: TodoBoard = Depends(get_board),
):
    _apply_view(board, tab, q)
    return HTMLResponse(board.view)


@router.get("/tasks/new")
async def new_task(board: TodoBoard = Depends(get_board)):
    board.open_create()
    return _back_to_board()


@router.get("/tasks/{task_id}/edit")
async def edit_task(task_id: str, board: TodoBoard = Depends(get_board)):
    board.open_edit(task_id)
    return _back_to_board()


@router.post("/tasks")
async def submit_task(request: Request, board: TodoBoard = Depends(get_board)):
    form = await request.form()
    fields = TaskFields.from_form({k: v for k, v in form.items() if isinstance(v, str)})
    await board.submit_form(fields)
    return _back_to_board()


@router.post("/form/close")
async def close_form(board: TodoBoard = Depends(get_board)):
    await board.close_form()
    return _back_to_board()


@router.post("/tasks/{task_id}/complete")
async def complete_task(task_id: str, board: TodoBoard = Depends(get_board)):
    await board.complete_task(task_id)
    return _back_to_board()


@router.post("/tasks/{task_id}/delete")
async def delete_task(task_id: str, board: TodoBoard = Depends(get_board)):
    await board.delete_task(task_id)
    return _back_to_board()
