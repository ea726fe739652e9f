"""Keyword-gated recognizers that turn an utterance into a structured command.

Every ``parse_*`` function is pure: it looks at the text (and, where a target
task has to be found, a snapshot of the existing tasks) and returns a command
model or None. None means "not mine", never an error.

``COMMAND_RULES`` fixes the order the router tries them in. An utterance that
passes several gates (say "create" and "complete") goes to the earliest rule.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Sequence

from pydantic import BaseModel

from extraction.datetime_extractor import (
    WEEKDAYS,
    extract_date,
    extract_time,
    resolve_day_keyword,
)
from extraction.task_resolver import resolve_task_id
from study_assistant.models import (
    DEFAULT_COURSE,
    CreateEventCommand,
    CreateTaskCommand,
    CreateTasksCommand,
    DeleteTaskCommand,
    EventColor,
    Priority,
    Task,
    TaskFields,
    TaskUpdate,
    ToggleCompleteCommand,
    ToggleStarCommand,
    UpdateTaskCommand,
)

EVENT_KEYWORDS = ("create", "add", "schedule")
CREATE_TASK_KEYWORDS = ("create", "add", "make", "schedule")
CREATE_TASKS_KEYWORDS = ("create", "add", "make")
UPDATE_KEYWORDS = ("update", "change", "modify", "edit")
DELETE_KEYWORDS = ("delete", "remove", "cancel", "clear", "get rid of", "eliminate")
COMPLETE_KEYWORDS = ("complete", "finish", "done", "mark as done")
STAR_KEYWORDS = ("star", "favorite", "bookmark", "pin")

TASK_NOUNS = ("task", "assignment", "to-do", "todo")
EVENT_NOUNS = ("event", "meeting", "class", "appointment")

# First keyword present decides the colour.
EVENT_COLORS = (
    ("meeting", EventColor.BLUE),
    ("class", EventColor.GREEN),
    ("appointment", EventColor.PURPLE),
    ("deadline", EventColor.RED),
    ("personal", EventColor.PINK),
)

DEFAULT_EVENT_TITLE = "New Event"
DEFAULT_TASK_TITLE = "New Task"
DEFAULT_EVENT_TIME = "09:00 AM"
MAX_BATCH_TASKS = 10

_TASK_NOUN = r"(?:task|assignment|to-do|todo)"
_EVENT_NOUN = r"(?:event|meeting|class|appointment)"
_DAY = "|".join(("today", "tomorrow") + WEEKDAYS)
_COURSE_PHRASE = (
    r"(?:for|in)\s+(?:the\s+)?"
    r"(?:(?:class|course)\s+[\w-]+|(?:[\w-]+\s+){0,2}(?:class|course)\b)"
)

_DATE_TIME_CLAUSES = (
    r"(?:due|on|at|by)\b",
    rf"(?:{_DAY})\b",
    r"(?:with\s+)?(?:high|medium|low)\s+priority\b",
    r"priority\s+(?:high|medium|low)\b",
    _COURSE_PHRASE,
    r"\d{1,2}(?::\d{2})?\s*[ap]\.?m\b",
)


def _clause_cutter(*extra: str) -> re.Pattern:
    alternatives = "|".join(_DATE_TIME_CLAUSES + extra)
    return re.compile(rf"(?:^|\s+)(?:{alternatives})", re.IGNORECASE)


_TITLE_END = _clause_cutter(r"about\b", r"(?:description|details)\s*:")
_DESCRIPTION_END = _clause_cutter()
_UPDATE_VALUE_END = re.compile(
    r"\s*(?:[,;]|\.(?:\s|$)|\s(?:and|priority|due|date|time|description|details"
    r"|course|class|status|mark|title|name)\b)",
    re.IGNORECASE,
)
_LEADING_FILLER = re.compile(
    r"^(?:(?:a|an|the|new|my|to|called|named|titled|urgent|important"
    r"|(?:high|medium|low)\s+priority)\s+)+",
    re.IGNORECASE,
)

_QUOTED = (
    re.compile(r"\"([^\"]+)\""),
    re.compile(r"(?<!\w)'([^']+)'(?!\w)"),
)
_NAMED = re.compile(r"\b(?:called|named|titled)\s+(.+)", re.IGNORECASE)

_TASK_TITLE_PATTERNS = _QUOTED + (
    _NAMED,
    re.compile(rf"\b{_TASK_NOUN}\b\s*:?\s+(.+)", re.IGNORECASE),
    re.compile(rf"\b(?:create|add|make|schedule)\s+(.+?)\s+{_TASK_NOUN}\b", re.IGNORECASE),
    re.compile(r"\b(?:create|add|make|schedule)\b\s*:?\s*(.+)", re.IGNORECASE),
)

_EVENT_TITLE_PATTERNS = _QUOTED + (
    _NAMED,
    re.compile(r"\b((?:meeting|appointment|class)\s+with\s+.+)", re.IGNORECASE),
    re.compile(rf"\b{_EVENT_NOUN}\b\s*:?\s+(?:for\s+)?(.+)", re.IGNORECASE),
    re.compile(rf"\b(?:create|add|schedule)\s+(.+?)\s+{_EVENT_NOUN}\b", re.IGNORECASE),
)

_COURSE_PATTERNS = (
    re.compile(r"\b(?:for|in)\s+(?:the\s+)?(?:class|course)\s+([\w-]+(?:\s+[\w-]+)?)", re.IGNORECASE),
    re.compile(r"\b(?:for|in)\s+(?:the\s+)?((?:[\w-]+\s+)?[\w-]+)\s+(?:class|course)\b", re.IGNORECASE),
)
_DESCRIPTION_PATTERNS = (
    re.compile(r"\b(?:description|details)\s*:\s*(.+)", re.IGNORECASE),
    re.compile(r"\babout\s+(.+)", re.IGNORECASE),
)

_VALUE = r"(?:\"([^\"]+)\"|'([^']+)'|(.+))"
_UPDATE_TITLE = re.compile(
    rf"\b(?:title|name)\b(?:\s+of\s+.+?)?\s+(?:to|as)\s+{_VALUE}", re.IGNORECASE
)
_UPDATE_DESCRIPTION = re.compile(
    rf"\b(?:description|details)\s*(?::|\s(?:to|as)\s)\s*{_VALUE}", re.IGNORECASE
)
_UPDATE_COURSE = re.compile(rf"\b(?:course|class)\s+(?:to|as)\s+{_VALUE}", re.IGNORECASE)
_UPDATE_DAY = re.compile(
    rf"\b(?:due\s+date|date|due)\s+(?:(?:to|as|on|by|for)\s+)?({_DAY})\b", re.IGNORECASE
)
_UPDATE_ISO_DATE = re.compile(
    r"\b(?:due\s+date|date|due)\s+(?:(?:to|as|on|by)\s+)?(\d{4}-\d{2}-\d{2})\b", re.IGNORECASE
)
_UPDATE_PRIORITY = re.compile(
    r"\bpriority\s+(?:(?:to|as)\s+)?(high|medium|low)\b|\b(high|medium|low)\s+priority\b",
    re.IGNORECASE,
)
_UPDATE_STATUS = re.compile(
    r"\bstatus\s+(?:to|as)\s+(completed?|pending|in[\s-]progress)\b", re.IGNORECASE
)
_STATUS_PHRASES = (
    (("mark as completed", "mark completed", "mark as complete"), "completed"),
    (("mark as pending",), "pending"),
    (("mark as in progress", "mark as in-progress"), "in-progress"),
)

_TASK_LIST = re.compile(r"\b(?:create|add|make)\s+tasks\s*:\s*(.+)", re.IGNORECASE)
_LIST_SEPARATOR = re.compile(r"\s*[,;]\s*|\s+and\s+|\s+then\s+", re.IGNORECASE)
# Unicode-aware \s, so a non-breaking space is trimmed too.
_EDGE_JUNK = re.compile(r"^[\s,.;:\-\"']+|[\s,.;:\-\"']+$")


def contains_any(text: str, keywords: Sequence[str]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def _has_word(text: str, words: Sequence[str]) -> bool:
    pattern = r"\b(?:" + "|".join(re.escape(w) for w in words) + r")s?\b"
    return re.search(pattern, text, re.IGNORECASE) is not None


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def _cut(candidate: str, end: re.Pattern) -> str:
    match = end.search(candidate)
    if match:
        candidate = candidate[: match.start()]
    return _EDGE_JUNK.sub("", candidate)


def _clean_title(candidate: str) -> str:
    candidate = _LEADING_FILLER.sub("", candidate.strip())
    return _cut(candidate, _TITLE_END)


def _first_title(text: str, patterns: Sequence[re.Pattern], nouns: Sequence[str]) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if not match:
            continue
        title = _clean_title(match.group(1))
        if title.strip() and title.lower() not in nouns:
            return title
    return None


def _update_value(match: re.Match) -> Optional[str]:
    quoted = match.group(1) or match.group(2)
    if quoted:
        return quoted.strip()
    value = _cut(match.group(3), _UPDATE_VALUE_END)
    return value or None


def extract_priority(text: str) -> Priority:
    lowered = text.lower()
    if "not important" in lowered:
        return "low"
    if _has_word(lowered, ("high", "important", "urgent")):
        return "high"
    if _has_word(lowered, ("low",)):
        return "low"
    return "medium"


def extract_course(text: str) -> Optional[str]:
    for pattern in _COURSE_PATTERNS:
        match = pattern.search(text)
        if match:
            course = _cut(match.group(1), _TITLE_END)
            if course:
                return course
    return None


def extract_description(text: str) -> Optional[str]:
    for pattern in _DESCRIPTION_PATTERNS:
        match = pattern.search(text)
        if match:
            description = _cut(match.group(1), _DESCRIPTION_END)
            if description:
                return description
    return None


def event_color(text: str) -> EventColor:
    lowered = text.lower()
    for keyword, color in EVENT_COLORS:
        if keyword in lowered:
            return color
    return EventColor.BLUE


def _task_fields(title: str, text: str, today: Optional[date]) -> TaskFields:
    return TaskFields(
        title=_capitalize(title),
        description=extract_description(text),
        due_date=extract_date(text, today),
        due_time=extract_time(text),
        priority=extract_priority(text),
        status="pending",
        course=extract_course(text) or DEFAULT_COURSE,
        tags=[],
        completed=False,
        starred=False,
    )


def _names_event_not_task(text: str) -> bool:
    without_course = re.sub(_COURSE_PHRASE, " ", text, flags=re.IGNORECASE)
    return _has_word(without_course, EVENT_NOUNS) and not _has_word(text, TASK_NOUNS)


def parse_event(text: str, today: Optional[date] = None) -> Optional[CreateEventCommand]:
    if not contains_any(text, EVENT_KEYWORDS):
        return None

    title = _first_title(text, _EVENT_TITLE_PATTERNS, EVENT_NOUNS)
    if title is None:
        noun = re.search(rf"\b{_EVENT_NOUN}\b", text, re.IGNORECASE)
        title = noun.group(0).lower() if noun else DEFAULT_EVENT_TITLE

    return CreateEventCommand(
        title=_capitalize(title),
        date=extract_date(text, today),
        time=extract_time(text) or DEFAULT_EVENT_TIME,
        color=event_color(text),
    )


def parse_task(text: str, today: Optional[date] = None) -> Optional[CreateTaskCommand]:
    if not contains_any(text, CREATE_TASK_KEYWORDS):
        return None
    # "create class today at 6pm" belongs to the event fallback.
    if _names_event_not_task(text):
        return None

    title = _first_title(text, _TASK_TITLE_PATTERNS, TASK_NOUNS) or DEFAULT_TASK_TITLE
    return CreateTaskCommand(task=_task_fields(title, text, today))


def parse_multiple_tasks(text: str, today: Optional[date] = None) -> Optional[CreateTasksCommand]:
    """``create tasks: a, b and c`` -> one task per fragment."""
    if not contains_any(text, CREATE_TASKS_KEYWORDS):
        return None
    match = _TASK_LIST.search(text)
    if not match:
        return None

    fragments = [f.strip().lstrip("-•").strip() for f in _LIST_SEPARATOR.split(match.group(1))]
    fragments = [f for f in fragments if len(f) > 2][:MAX_BATCH_TASKS]

    tasks = []
    for fragment in fragments:
        title = _clean_title(fragment)
        if not title.strip():
            continue
        tasks.append(_task_fields(title, fragment, today))
    if len(tasks) < 2:
        return None
    return CreateTasksCommand(tasks=tasks)


def parse_task_update(
    text: str, tasks: Sequence[Task], today: Optional[date] = None
) -> Optional[UpdateTaskCommand]:
    if not contains_any(text, UPDATE_KEYWORDS):
        return None
    task_id = resolve_task_id(text, tasks)
    if task_id is None:
        return None

    updates: dict = {}
    lowered = text.lower()

    match = _UPDATE_TITLE.search(text)
    if match and _update_value(match):
        updates["title"] = _update_value(match)

    match = _UPDATE_DESCRIPTION.search(text)
    if match and _update_value(match):
        updates["description"] = _update_value(match)

    match = _UPDATE_DAY.search(text)
    if match:
        updates["due_date"] = resolve_day_keyword(match.group(1), today)
    else:
        match = _UPDATE_ISO_DATE.search(text)
        if match:
            try:
                updates["due_date"] = date.fromisoformat(match.group(1))
            except ValueError:
                pass

    due_time = extract_time(text)
    if due_time:
        updates["due_time"] = due_time

    match = _UPDATE_PRIORITY.search(text)
    if match:
        updates["priority"] = (match.group(1) or match.group(2)).lower()

    status = None
    for phrases, value in _STATUS_PHRASES:
        if any(phrase in lowered for phrase in phrases):
            status = value
            break
    if status is None:
        match = _UPDATE_STATUS.search(text)
        if match:
            raw = match.group(1).lower()
            status = "completed" if raw.startswith("complete") else raw.replace(" ", "-")
    if status is not None:
        updates["status"] = status
        updates["completed"] = status == "completed"

    match = _UPDATE_COURSE.search(text)
    if match and _update_value(match):
        updates["course"] = _update_value(match)

    if not updates:
        return None
    return UpdateTaskCommand(task_id=task_id, updates=TaskUpdate(**updates))


def parse_task_deletion(text: str, tasks: Sequence[Task]) -> Optional[DeleteTaskCommand]:
    if not contains_any(text, DELETE_KEYWORDS):
        return None
    task_id = resolve_task_id(text, tasks)
    return DeleteTaskCommand(task_id=task_id) if task_id else None


def parse_task_completion(text: str, tasks: Sequence[Task]) -> Optional[ToggleCompleteCommand]:
    if not contains_any(text, COMPLETE_KEYWORDS):
        return None
    task_id = resolve_task_id(text, tasks)
    return ToggleCompleteCommand(task_id=task_id) if task_id else None


def parse_task_starring(text: str, tasks: Sequence[Task]) -> Optional[ToggleStarCommand]:
    if not contains_any(text, STAR_KEYWORDS):
        return None
    task_id = resolve_task_id(text, tasks)
    return ToggleStarCommand(task_id=task_id) if task_id else None


# --- rule table ------------------------------------------------------------


@dataclass(frozen=True)
class ParseContext:
    """What a parse may look at besides the text itself."""

    tasks: Sequence[Task] = ()
    today: date = field(default_factory=date.today)


@dataclass(frozen=True)
class IntentRule:
    name: str
    keywords: tuple
    parse: Callable[[str, ParseContext], Optional[BaseModel]]

    def matches(self, text: str) -> bool:
        return contains_any(text, self.keywords)

    def apply(self, text: str, context: ParseContext) -> Optional[BaseModel]:
        if not self.matches(text):
            return None
        return self.parse(text, context)


COMMAND_RULES = (
    IntentRule(
        "create_tasks", CREATE_TASKS_KEYWORDS, lambda text, ctx: parse_multiple_tasks(text, ctx.today)
    ),
    IntentRule("create_task", CREATE_TASK_KEYWORDS, lambda text, ctx: parse_task(text, ctx.today)),
    IntentRule(
        "update_task", UPDATE_KEYWORDS, lambda text, ctx: parse_task_update(text, ctx.tasks, ctx.today)
    ),
    IntentRule("delete_task", DELETE_KEYWORDS, lambda text, ctx: parse_task_deletion(text, ctx.tasks)),
    IntentRule(
        "toggle_complete", COMPLETE_KEYWORDS, lambda text, ctx: parse_task_completion(text, ctx.tasks)
    ),
    IntentRule("toggle_star", STAR_KEYWORDS, lambda text, ctx: parse_task_starring(text, ctx.tasks)),
)

EVENT_FALLBACK_RULE = IntentRule(
    "create_event", EVENT_KEYWORDS, lambda text, ctx: parse_event(text, ctx.today)
)
