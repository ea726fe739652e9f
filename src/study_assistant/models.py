from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


Priority = Literal["low", "medium", "high"]
TaskStatus = Literal["pending", "in-progress", "completed", "overdue"]

DEFAULT_COURSE = "General"
TIME_FORMAT = "%I:%M %p"


class EventColor(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    RED = "red"
    PINK = "pink"
    INDIGO = "indigo"
    GRAY = "gray"


class TaskFields(BaseModel):
    """Everything a task carries except its identifier."""

    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    due_date: dt.date
    due_time: Optional[str] = None
    priority: Priority = "medium"
    status: TaskStatus = "pending"
    course: str = DEFAULT_COURSE
    tags: List[str] = Field(default_factory=list)
    completed: bool = False
    starred: bool = False

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2


class Task(TaskFields):
    id: str


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[dt.date] = None
    due_time: Optional[str] = None
    priority: Optional[Priority] = None
    status: Optional[TaskStatus] = None
    course: Optional[str] = None
    tags: Optional[List[str]] = None
    completed: Optional[bool] = None
    starred: Optional[bool] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class CalendarEvent(BaseModel):
    id: int
    title: str
    date: dt.date
    color: EventColor = EventColor.BLUE
    time: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    def duration_minutes(self) -> int:
        """Minutes between start_time and end_time, 0 when either is unusable."""
        if not self.start_time or not self.end_time:
            return 0
        try:
            start = dt.datetime.strptime(self.start_time.strip().upper(), TIME_FORMAT)
            end = dt.datetime.strptime(self.end_time.strip().upper(), TIME_FORMAT)
        except ValueError:
            return 0
        minutes = int((end - start).total_seconds() // 60)
        return minutes if minutes > 0 else 0


def _due_datetime(task: TaskFields) -> dt.datetime:
    if task.due_time:
        try:
            parsed = dt.datetime.strptime(task.due_time.strip().upper(), TIME_FORMAT)
            return dt.datetime.combine(task.due_date, parsed.time())
        except ValueError:
            pass
    # Without a usable time the task is due at the end of its day.
    return dt.datetime.combine(task.due_date, dt.datetime.max.time())


def derive_status(task: TaskFields, now: Optional[dt.datetime] = None) -> TaskStatus:
    """Status as shown to the user: completed wins, then overdue, then stored."""
    if task.completed or task.status == "completed":
        return "completed"
    now = now or dt.datetime.now()
    if _due_datetime(task) < now:
        return "overdue"
    if task.status == "overdue":
        return "pending"
    return task.status


# --- parsed commands -------------------------------------------------------


class CreateEventCommand(BaseModel):
    kind: Literal["create_event"] = "create_event"
    title: str
    date: dt.date
    time: str
    color: EventColor


class CreateTaskCommand(BaseModel):
    kind: Literal["create_task"] = "create_task"
    task: TaskFields


class CreateTasksCommand(BaseModel):
    kind: Literal["create_tasks"] = "create_tasks"
    tasks: List[TaskFields]


class UpdateTaskCommand(BaseModel):
    kind: Literal["update_task"] = "update_task"
    task_id: str
    updates: TaskUpdate


class DeleteTaskCommand(BaseModel):
    kind: Literal["delete_task"] = "delete_task"
    task_id: str


class ToggleCompleteCommand(BaseModel):
    kind: Literal["toggle_complete"] = "toggle_complete"
    task_id: str


class ToggleStarCommand(BaseModel):
    kind: Literal["toggle_star"] = "toggle_star"
    task_id: str


class AskCommand(BaseModel):
    kind: Literal["ask"] = "ask"
    prompt: str


class UnrecognizedCommand(BaseModel):
    kind: Literal["unrecognized"] = "unrecognized"
    text: str = ""


ParsedCommand = Annotated[
    Union[
        CreateEventCommand,
        CreateTaskCommand,
        CreateTasksCommand,
        UpdateTaskCommand,
        DeleteTaskCommand,
        ToggleCompleteCommand,
        ToggleStarCommand,
        AskCommand,
        UnrecognizedCommand,
    ],
    Field(discriminator="kind"),
]


class AssistantSettings(BaseModel):
    """What the dispatcher needs from the app's settings. Read-only to it."""

    selected_model: str = "gemini-2.5-pro"
    api_key: Optional[str] = None

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())
