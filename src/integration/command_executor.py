from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from storage.event_store import EventStore
from storage.task_store import TaskNotFoundError, TaskStore
from study_assistant.models import (
    CalendarEvent,
    CreateEventCommand,
    CreateTaskCommand,
    CreateTasksCommand,
    DeleteTaskCommand,
    Task,
    ToggleCompleteCommand,
    ToggleStarCommand,
    UnrecognizedCommand,
    UpdateTaskCommand,
)

logger = logging.getLogger(__name__)

UNRECOGNIZED_MESSAGE = (
    "I couldn't turn that into an action. Try something like "
    '"create task read chapter 3 due friday" or "delete the essay task".'
)


@dataclass
class ExecutionResult:
    kind: str
    message: str
    applied: bool
    tasks: list[Task] = field(default_factory=list)
    event: Optional[CalendarEvent] = None


class CommandExecutor:
    """Applies parsed commands to the task and event stores."""

    def __init__(self, tasks: TaskStore, events: EventStore):
        self.tasks = tasks
        self.events = events
        self._handlers = {
            "create_event": self._create_event,
            "create_task": self._create_task,
            "create_tasks": self._create_tasks,
            "update_task": self._update_task,
            "delete_task": self._delete_task,
            "toggle_complete": self._toggle_complete,
            "toggle_star": self._toggle_star,
            "unrecognized": self._unrecognized,
        }

    def execute(self, command) -> ExecutionResult:
        handler = self._handlers.get(command.kind)
        if handler is None:
            raise ValueError(f"{command.kind!r} commands are not applied to the stores")
        try:
            result = handler(command)
        except TaskNotFoundError as e:
            logger.info("Command %s targeted a missing task %s", command.kind, e.task_id)
            return ExecutionResult(command.kind, "That task no longer exists.", False)
        logger.info("Applied %s command", command.kind)
        return result

    def _create_event(self, command: CreateEventCommand) -> ExecutionResult:
        event = self.events.create_event(
            title=command.title, date=command.date, time=command.time, color=command.color
        )
        when = event.date.strftime("%A, %B %d").replace(" 0", " ")
        return ExecutionResult(
            command.kind,
            f'"{event.title}" has been added to your calendar for {when} at {command.time}.',
            True,
            event=event,
        )

    def _create_task(self, command: CreateTaskCommand) -> ExecutionResult:
        task = self.tasks.add_task(command.task)
        return ExecutionResult(
            command.kind, f'"{task.title}" has been added to your tasks.', True, tasks=[task]
        )

    def _create_tasks(self, command: CreateTasksCommand) -> ExecutionResult:
        created = [self.tasks.add_task(fields) for fields in command.tasks]
        titles = ", ".join(f'"{t.title}"' for t in created)
        return ExecutionResult(
            command.kind, f"Added {len(created)} tasks: {titles}.", True, tasks=created
        )

    def _update_task(self, command: UpdateTaskCommand) -> ExecutionResult:
        task = self.tasks.update_task(command.task_id, command.updates)
        return ExecutionResult(command.kind, f'"{task.title}" has been updated.', True, tasks=[task])

    def _delete_task(self, command: DeleteTaskCommand) -> ExecutionResult:
        task = self.tasks.delete_task(command.task_id)
        return ExecutionResult(command.kind, f'"{task.title}" has been removed.', True, tasks=[task])

    def _toggle_complete(self, command: ToggleCompleteCommand) -> ExecutionResult:
        task = self.tasks.toggle_completed(command.task_id)
        state = "completed" if task.completed else "marked as pending"
        return ExecutionResult(command.kind, f'"{task.title}" has been {state}.', True, tasks=[task])

    def _toggle_star(self, command: ToggleStarCommand) -> ExecutionResult:
        task = self.tasks.toggle_starred(command.task_id)
        state = "starred" if task.starred else "unstarred"
        return ExecutionResult(command.kind, f'"{task.title}" has been {state}.', True, tasks=[task])

    def _unrecognized(self, command: UnrecognizedCommand) -> ExecutionResult:
        return ExecutionResult(command.kind, UNRECOGNIZED_MESSAGE, False)
