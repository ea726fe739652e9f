from __future__ import annotations

import threading
import uuid
from typing import Optional

from study_assistant.models import Task, TaskFields, TaskUpdate


class TaskNotFoundError(KeyError):
    def __init__(self, task_id: str):
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task {self.task_id!r} not found"


class TaskStore:
    """In-memory task list, kept in insertion order."""

    def __init__(self, tasks: Optional[list[Task]] = None):
        self._tasks: list[Task] = list(tasks or [])
        self._lock = threading.Lock()

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def get_task(self, task_id: str) -> Task:
        with self._lock:
            return self._tasks[self._index(task_id)]

    def add_task(self, fields: TaskFields) -> Task:
        task = Task(id=uuid.uuid4().hex, **fields.model_dump())
        with self._lock:
            self._tasks.append(task)
        return task

    def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        with self._lock:
            i = self._index(task_id)
            merged = {**self._tasks[i].model_dump(), **updates.changes(), "id": task_id}
            self._tasks[i] = Task.model_validate(merged)
            return self._tasks[i]

    def delete_task(self, task_id: str) -> Task:
        with self._lock:
            return self._tasks.pop(self._index(task_id))

    def toggle_completed(self, task_id: str) -> Task:
        with self._lock:
            i = self._index(task_id)
            done = not self._tasks[i].completed
            self._tasks[i] = self._tasks[i].model_copy(
                update={"completed": done, "status": "completed" if done else "pending"}
            )
            return self._tasks[i]

    def toggle_starred(self, task_id: str) -> Task:
        with self._lock:
            i = self._index(task_id)
            self._tasks[i] = self._tasks[i].model_copy(
                update={"starred": not self._tasks[i].starred}
            )
            return self._tasks[i]

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()

    def _index(self, task_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise TaskNotFoundError(task_id)
