import json
from datetime import datetime, timedelta

import pytest

from campuslife.tasks import Priority, Task, TaskList, priority_color

NOW = datetime(2024, 5, 1, 9, 30)


@pytest.fixture
def store(tmp_path):
    return TaskList(tmp_path / "tasks_alice.json")


def test_priority_color():
    assert priority_color("高") == "red"
    assert priority_color(Priority.MEDIUM) == "orange"
    assert priority_color("低") == "green"
    assert priority_color("other") == "green"


def test_label_open_and_done():
    task = Task("Essay", datetime(2024, 5, 1, 9, 30), "高")
    assert task.label() == "[未完成] Essay - 截止: 2024-05-01 09:30 - 优先级: 高"
    task.completed = True
    assert task.label().startswith("[已完成] Essay")


def test_label_without_deadline():
    task = Task("Read", None, "中")
    assert task.label() == "[未完成] Read - 截止:  - 优先级: 中"


def test_hours_until_truncates():
    task = Task("x", NOW + timedelta(hours=5, minutes=59), "低")
    assert task.hours_until(NOW) == 5
    late = Task("x", NOW - timedelta(hours=2, minutes=30), "低")
    assert late.hours_until(NOW) == -2
    assert Task("x", None, "低").hours_until(NOW) == 0


def test_missing_file_gives_no_tasks(store):
    assert store.tasks == []


def test_add_and_reload_roundtrip(store):
    deadline = NOW + timedelta(days=7)
    store.add("Essay", deadline, Priority.HIGH, NOW)
    reloaded = TaskList(store.path)
    assert len(reloaded.tasks) == 1
    task = reloaded.tasks[0]
    assert task.name == "Essay"
    assert task.deadline == deadline
    assert task.priority == "高"
    assert task.completed is False
    assert task.created == NOW


def test_saved_file_keys(store):
    store.add("Essay", NOW, "中", NOW)
    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert set(data[0]) == {"name", "deadline", "priority", "completed", "createTime"}
    assert data[0]["createTime"] == "2024-05-01T09:30:00"


def test_add_rejects_empty_name(store):
    with pytest.raises(ValueError):
        store.add("", NOW, "中", NOW)


def test_add_rejects_unknown_priority(store):
    with pytest.raises(ValueError):
        store.add("x", NOW, "urgent", NOW)


def test_invalid_json_gives_no_tasks(tmp_path):
    path = tmp_path / "t.json"
    path.write_text("not json", encoding="utf-8")
    assert TaskList(path).tasks == []


def test_delete_matching_removes_last_match(store):
    store.add("Essay", NOW, "中", NOW)
    store.add("Essay", NOW + timedelta(days=1), "高", NOW)
    assert store.delete_matching(store.tasks[1].label()) is True
    assert [t.priority for t in store.tasks] == ["中"]
    assert len(TaskList(store.path).tasks) == 1


def test_delete_matching_without_match(store):
    store.add("Essay", NOW, "中", NOW)
    assert store.delete_matching("nothing here") is False
    assert len(store.tasks) == 1


def test_toggle_matching(store):
    store.add("Essay", NOW, "中", NOW)
    assert store.toggle_matching("[未完成] Essay") is True
    assert TaskList(store.path).tasks[0].completed is True
    store.toggle_matching("Essay")
    assert store.tasks[0].completed is False
    assert store.toggle_matching("zzz") is False


def test_visible_sorted_and_filtered(store):
    store.add("late", NOW + timedelta(days=3), "低", NOW)
    store.add("early", NOW + timedelta(days=1), "低", NOW)
    store.add("mid", NOW + timedelta(days=2), "低", NOW)
    store.toggle_matching("mid")
    assert [t.name for t in store.visible(True)] == ["early", "mid", "late"]
    assert [t.name for t in store.visible(False)] == ["early", "late"]


def test_visible_unreadable_deadline_first(store):
    store.add("a", NOW, "低", NOW)
    store.tasks.append(Task("b", None, "低"))
    assert [t.name for t in store.visible(True)] == ["b", "a"]


def test_due_soon(store):
    store.add("soon", NOW + timedelta(hours=3, minutes=10), "低", NOW)
    store.add("far", NOW + timedelta(days=3), "低", NOW)
    store.add("past", NOW - timedelta(hours=3), "低", NOW)
    store.add("now", NOW + timedelta(minutes=30), "低", NOW)
    store.add("done", NOW + timedelta(hours=2), "低", NOW)
    store.toggle_matching("done")
    result = store.due_soon(NOW)
    assert [(t.name, h) for t, h in result] == [("soon", 3)]


def test_completed_only_true_for_json_true(tmp_path):
    path = tmp_path / "t.json"
    path.write_text(
        json.dumps(
            [
                {"name": "a", "completed": "yes"},
                {"name": "b", "completed": True},
            ]
        ),
        encoding="utf-8",
    )
    tasks = TaskList(path).tasks
    assert [t.completed for t in tasks] == [False, True]
    assert tasks[0].deadline is None