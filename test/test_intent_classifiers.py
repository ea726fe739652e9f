import datetime as dt

from classification.intent_classifiers import (
    COMMAND_RULES,
    EVENT_FALLBACK_RULE,
    IntentRule,
    ParseContext,
    extract_course,
    extract_priority,
    parse_event,
    parse_multiple_tasks,
    parse_task,
    parse_task_completion,
    parse_task_deletion,
    parse_task_starring,
    parse_task_update,
)
from study_assistant.models import EventColor


def test_priority_examples():
    assert extract_priority("create urgent task call mom") == "high"
    assert extract_priority("create a low priority task buy milk") == "low"
    assert extract_priority("create task finish report") == "medium"
    assert extract_priority("create task water plants, not important") == "low"


def test_priority_uses_whole_words():
    # "highlight" is not "high", "below" is not "low"
    assert extract_priority("create task highlight notes below the fold") == "medium"


def test_parse_task_full_fields(today):
    cmd = parse_task("create task math homework tomorrow at 6pm", today)
    task = cmd.task
    assert task.title == "Math homework"
    assert task.due_date == dt.date(2026, 1, 2)
    assert task.due_time == "06:00 PM"
    assert task.priority == "medium"
    assert task.course == "General"
    assert task.status == "pending"
    assert not task.completed and not task.starred


def test_parse_task_title_tiers(today):
    assert parse_task('add "Read Hamlet" due friday', today).task.title == "Read Hamlet"
    assert parse_task("create a low priority task buy milk", today).task.title == "Buy milk"
    assert parse_task("add lab report assignment", today).task.title == "Lab report"
    assert parse_task("create task", today).task.title == "New Task"


def test_parse_task_course_and_description(today):
    cmd = parse_task("create task problem set 3 for the class Calculus about limits", today)
    assert cmd.task.title == "Problem set 3"
    assert cmd.task.course == "Calculus"
    assert cmd.task.description == "limits"
    assert extract_course("add task essay for history class") == "history"


def test_parse_task_declines_event_utterances(today):
    assert parse_task("schedule meeting with John tomorrow at 3pm", today) is None
    assert parse_task("read a book", today) is None


def test_parse_event(today):
    cmd = parse_event("schedule meeting with John tomorrow at 3pm", today)
    assert cmd.title == "Meeting with John"
    assert cmd.date == dt.date(2026, 1, 2)
    assert cmd.time == "03:00 PM"
    assert cmd.color == EventColor.BLUE


def test_parse_event_defaults(today):
    cmd = parse_event("add class today", today)
    assert cmd.title == "Class"
    assert cmd.date == today
    assert cmd.time == "09:00 AM"
    assert cmd.color == EventColor.GREEN
    assert parse_event("schedule something", today).color == EventColor.BLUE
    assert parse_event("what is on today", today) is None


def test_parse_multiple_tasks(today):
    cmd = parse_multiple_tasks("create tasks: read chapter 3, write essay friday and email professor", today)
    titles = [t.title for t in cmd.tasks]
    assert titles == ["Read chapter 3", "Write essay", "Email professor"]
    assert cmd.tasks[1].due_date == dt.date(2026, 1, 2)
    assert cmd.tasks[0].due_date == today


def test_parse_multiple_tasks_needs_two_fragments(today):
    assert parse_multiple_tasks("create tasks: read", today) is None
    assert parse_multiple_tasks("create task read, write", today) is None


def test_parse_task_update_fields(task_factory, today):
    tasks = [task_factory("t1", "Math homework")]
    cmd = parse_task_update("update math homework priority to high", tasks, today)
    assert cmd.task_id == "t1"
    assert cmd.updates.changes() == {"priority": "high"}

    cmd = parse_task_update("change math homework due date to friday", tasks, today)
    assert cmd.updates.changes() == {"due_date": dt.date(2026, 1, 2)}

    cmd = parse_task_update("edit math homework: mark as completed", tasks, today)
    assert cmd.updates.changes() == {"status": "completed", "completed": True}


def test_parse_task_update_requires_target_and_field(task_factory, today):
    tasks = [task_factory("t1", "Math homework")]
    assert parse_task_update("update math homework", tasks, today) is None
    assert parse_task_update("update chemistry priority to high", tasks, today) is None


def test_delete_complete_star(task_factory):
    tasks = [task_factory("t1", "Math homework")]
    assert parse_task_deletion("get rid of math homework", tasks).task_id == "t1"
    assert parse_task_completion("mark math homework as done", tasks).task_id == "t1"
    assert parse_task_starring("pin math homework", tasks).task_id == "t1"
    assert parse_task_deletion("delete the chemistry lab", tasks) is None


def test_rule_table_order():
    names = [rule.name for rule in COMMAND_RULES]
    assert names == [
        "create_tasks",
        "create_task",
        "update_task",
        "delete_task",
        "toggle_complete",
        "toggle_star",
    ]
    assert EVENT_FALLBACK_RULE.name == "create_event"


def test_update_priority_either_word_order(task_factory, today):
    tasks = [task_factory("t1", "Math homework")]
    cmd = parse_task_update("update math homework to high priority", tasks, today)
    assert cmd.updates.changes() == {"priority": "high"}
    cmd = parse_task_update("change math homework priority low", tasks, today)
    assert cmd.updates.changes() == {"priority": "low"}


def test_update_iso_due_date(task_factory, today):
    tasks = [task_factory("t1", "Math homework")]
    cmd = parse_task_update("update math homework due 2026-02-15", tasks, today)
    assert cmd.updates.changes() == {"due_date": dt.date(2026, 2, 15)}
    assert parse_task_update("update math homework due date to 2026-13-40", tasks, today) is None


def test_update_text_fields_and_time(task_factory, today):
    tasks = [task_factory("t1", "Math homework")]

    cmd = parse_task_update('update math homework title to "Calculus problem set"', tasks, today)
    assert cmd.updates.changes() == {"title": "Calculus problem set"}

    cmd = parse_task_update("update math homework description: chapters 1 to 3", tasks, today)
    assert cmd.updates.changes() == {"description": "chapters 1 to 3"}

    cmd = parse_task_update("change math homework course to Calculus", tasks, today)
    assert cmd.updates.changes() == {"course": "Calculus"}

    cmd = parse_task_update("update math homework due time to 5pm", tasks, today)
    assert cmd.updates.changes() == {"due_time": "05:00 PM"}


def test_update_in_progress_clears_completed(task_factory, today):
    tasks = [task_factory("t1", "Math homework", completed=True, status="completed")]
    cmd = parse_task_update("update math homework: mark as in progress", tasks, today)
    assert cmd.updates.changes() == {"status": "in-progress", "completed": False}


def test_blank_unicode_title_falls_back(today):
    cmd = parse_task("create task -\u00a0-", today)
    assert cmd.task.title == "New Task"


def test_batch_skips_fragments_without_title(today):
    cmd = parse_multiple_tasks("create tasks: ..., read notes, write essay", today)
    assert [t.title for t in cmd.tasks] == ["Read notes", "Write essay"]
    assert parse_multiple_tasks("create tasks: ..., -\u00a0-, essay", today) is None


def test_rule_gate_short_circuits_parse():
    calls = []
    rule = IntentRule("archive", ("archive",), lambda text, ctx: calls.append(text) or "hit")

    assert rule.apply("delete the essay", ParseContext()) is None
    assert calls == []
    assert rule.apply("archive the essay", ParseContext()) == "hit"
    assert calls == ["archive the essay"]
