from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from storage.conversation_memory import ConversationMemory
from study_assistant.models import Task, derive_status

NO_TASKS_LINE = "CURRENT TASKS: You have no tasks yet."


def describe_task(task: Task, now: Optional[datetime] = None) -> str:
    due = task.due_date.isoformat()
    if task.due_time:
        due += f" at {task.due_time}"
    line = (
        f'- ID: {task.id}, Title: "{task.title}", Status: {task.status}, '
        f"Priority: {task.priority}, Due: {due}, Course: {task.course}, "
        f"Completed: {str(task.completed).lower()}, Starred: {str(task.starred).lower()}"
    )
    if derive_status(task, now) == "overdue":
        line += " [OVERDUE]"
    return line


def tasks_block(tasks: Sequence[Task], now: Optional[datetime] = None) -> str:
    if not tasks:
        return NO_TASKS_LINE
    return "CURRENT TASKS:\n" + "\n".join(describe_task(t, now) for t in tasks)


def build_prompt(
    question: str,
    tasks: Sequence[Task] = (),
    memory: Optional[ConversationMemory] = None,
    now: Optional[datetime] = None,
) -> str:
    """Question plus the current task list, prefixed with the recent conversation if any.

    Call before recording the question in ``memory``.
    """
    block = tasks_block(tasks, now)
    context = memory.context() if memory is not None else ""
    if not context:
        return f"{question}\n\n{block}"

    summary = memory.summary()
    topics = ", ".join(summary.topics) or "none"
    return (
        f"{context}Current question: {question}\n\n"
        f"Session Info: This conversation has {summary.message_count} messages "
        f"covering topics: {topics}.\n\n"
        f"{block}\n"
        "Please provide a personalized response that considers our conversation "
        "history and current tasks."
    )
