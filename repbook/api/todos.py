"""Todo API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from repbook.db import get_db
from repbook.models import Todo
from repbook.schemas.company import SortOrderItem
from repbook.schemas.todo import TodoCreate, TodoResponse, TodoUpdate

router = APIRouter(prefix="/todos", tags=["Todos"])


@router.get("", response_model=List[TodoResponse])
async def list_todos(
    db: AsyncSession = Depends(get_db),
    company_id: Optional[int] = Query(None),
    include_completed: bool = Query(True),
):
    """List todos, pinned first, then in saved order."""
    query = select(Todo)

    if company_id is not None:
        query = query.where(Todo.company_id == company_id)

    if not include_completed:
        query = query.where(Todo.completed == False)  # noqa: E712

    result = await db.execute(
        query.order_by(Todo.pinned.desc(), Todo.sort_order, Todo.id)
    )
    return result.scalars().all()


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
async def create_todo(data: TodoCreate, db: AsyncSession = Depends(get_db)):
    """Create a todo at the end of the list."""
    last = await db.scalar(select(func.coalesce(func.max(Todo.sort_order), -1)))
    todo = Todo(**data.model_dump(), completed=False, sort_order=last + 1)
    db.add(todo)
    await db.flush()
    return todo


@router.put("/sort-order")
async def reorder_todos(
    items: List[SortOrderItem],
    db: AsyncSession = Depends(get_db),
):
    for item in items:
        todo = await db.get(Todo, item.id)
        if not todo:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Todo {item.id} not found",
            )
        todo.sort_order = item.sort_order

    await db.flush()
    return {"success": True}


@router.patch("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: int,
    data: TodoUpdate,
    db: AsyncSession = Depends(get_db),
):
    todo = await db.get(Todo, todo_id)
    if not todo:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Todo not found",
        )

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(todo, field, value)

    await db.flush()
    return todo


@router.delete("/{todo_id}")
async def delete_todo(todo_id: int, db: AsyncSession = Depends(get_db)):
    todo = await db.get(Todo, todo_id)
    if not todo:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Todo not found",
        )

    await db.delete(todo)
    await db.flush()
    return {"success": True}
