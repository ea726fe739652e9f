from __future__ import annotations

import re
from typing import Optional, Sequence

from study_assistant.models import Task

_ID_REFERENCE = re.compile(r"\b(?:id|task)\s*[\"']?([\w-]+)[\"']?", re.IGNORECASE)


def resolve_task_id(text: str, tasks: Sequence[Task]) -> Optional[str]:
    """Find the task the text refers to.

    Pass 1 matches any task title contained in the text (case-insensitive,
    first task in store order wins). Pass 2 accepts an ``id <token>`` or
    ``task <token>`` reference, but only when the token is a known id.
    Returns None rather than guessing.
    """
    lowered = text.lower()
    for task in tasks:
        title = task.title.strip().lower()
        if title and title in lowered:
            return task.id

    known_ids = {task.id for task in tasks}
    for match in _ID_REFERENCE.finditer(text):
        token = match.group(1)
        if token in known_ids:
            return token

    return None
