import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_event_store, get_task_store
from storage.event_store import EventStore
from storage.task_store import TaskNotFoundError, TaskStore
from study_assistant.models import Task, derive_status

router = APIRouter()
logger = logging.getLogger(__name__)


def _task_out(task: Task) -> dict:
    data = task.model_dump(mode="json")
    data["display_status"] = derive_status(task)
    return data


@router.get("/tasks")
async def get_tasks(task_store: TaskStore = Depends(get_task_store)) -> dict:
    tasks = task_store.list_tasks()
    return {"tasks": [_task_out(t) for t in tasks], "total": len(tasks)}


@router.get("/tasks/{task_id}")
async def get_task(task_id: str, task_store: TaskStore = Depends(get_task_store)) -> dict:
    try:
        return _task_out(task_store.get_task(task_id))
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/events")
async def get_events(
    date: Optional[str] = None,
    event_store: EventStore = Depends(get_event_store),
) -> dict:
    """Calendar events, optionally for one day (YYYY-MM-DD)."""
    on = None
    if date:
        try:
            on = dt.date.fromisoformat(date)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")

    events = event_store.list_events(on)
    return {"events": [e.model_dump(mode="json") for e in events], "total": len(events)}
