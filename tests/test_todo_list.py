# tests/test_todo_list.py

from __future__ import annotations

import random

from models import Task
from todo_list import TaskList, fit_width

from .fakes import FakeRenderer


def _list(*texts: str, cursor: int = 0) -> TaskList:
    return TaskList([{"text": t, "done": False} for t in texts], cursor=cursor)


def test_empty_list_has_cursor_zero() -> None:
    tl = TaskList()
    assert tl.cursor == 0
    assert tl.current() is None
    assert tl.move_up() is False
    assert tl.move_down() is False
    assert tl.toggle_done() is False
    assert tl.delete_task() is False
    assert tl.cursor == 0


def test_initial_cursor_is_clamped() -> None:
    assert _list("a", "b", cursor=9).cursor == 1
    assert _list("a", "b", cursor=-3).cursor == 0


def test_moves_clamp_at_boundaries() -> None:
    tl = _list("a", "b", "c")
    assert tl.move_up() is False
    assert tl.move_down() and tl.move_down()
    assert tl.cursor == 2
    assert tl.move_down() is False
    assert tl.cursor == 2


def test_toggle_flips_only_the_selected_task() -> None:
    tl = _list("a", "b", "c", cursor=1)
    assert tl.toggle_done() is True
    assert [t.done for t in tl.tasks] == [False, True, False]
    tl.toggle_done()
    assert [t.done for t in tl.tasks] == [False, False, False]


def test_add_appends_and_selects_new_task() -> None:
    tl = _list("a", "b")
    tl.add_task(Task("c"))
    assert [t.text for t in tl.tasks] == ["a", "b", "c"]
    assert tl.cursor == 2
    assert tl.tasks[2].created_at is not None


def test_delete_last_row_moves_cursor_up() -> None:
    tl = _list("a", "b", "c", cursor=2)
    tl.delete_task()
    assert [t.text for t in tl.tasks] == ["a", "b"]
    assert tl.cursor == 1


def test_cursor_stays_in_bounds_under_random_commands() -> None:
    rng = random.Random(1234)
    tl = _list(*[f"task {i}" for i in range(8)])
    ops = [tl.move_up, tl.move_down, tl.delete_task]
    for _ in range(200):
        rng.choice(ops)()
        if tl.tasks:
            assert 0 <= tl.cursor < len(tl.tasks)
        else:
            assert tl.cursor == 0
            tl.add_task(Task("refill"))


def test_buy_milk_scenario() -> None:
    tl = TaskList()
    tl.add_task(Task("buy milk"))
    assert [(t.text, t.done) for t in tl.tasks] == [("buy milk", False)]
    tl.toggle_done()
    assert [(t.text, t.done) for t in tl.tasks] == [("buy milk", True)]
    tl.delete_task()
    assert tl.tasks == []
    assert tl.get_tasks() == []


def test_visible_range_follows_cursor() -> None:
    tl = _list(*[str(i) for i in range(10)], cursor=7)
    assert tl.visible_range(3) == range(5, 8)
    tl.cursor = 1
    assert tl.visible_range(3) == range(1, 4)
    assert tl.visible_range(0) == range(0)


def test_window_holds_still_while_cursor_moves_inside_it() -> None:
    tl = _list(*[str(i) for i in range(10)], cursor=7)
    assert tl.visible_range(3) == range(5, 8)
    tl.move_up()
    assert tl.visible_range(3) == range(5, 8)
    tl.move_up()
    assert tl.visible_range(3) == range(5, 8)
    tl.move_up()
    assert tl.visible_range(3) == range(4, 7)
    tl.move_down()
    assert tl.visible_range(3) == range(4, 7)


def test_window_shrinks_back_when_tasks_are_deleted() -> None:
    tl = _list(*[str(i) for i in range(6)], cursor=5)
    assert tl.visible_range(3) == range(3, 6)
    tl.delete_task()
    tl.delete_task()
    assert tl.cursor == 3
    assert tl.visible_range(3) == range(1, 4)


def test_display_marks_cursor_and_done_rows() -> None:
    tl = _list("first", "second", cursor=1)
    tl.tasks[0].done = True
    r = FakeRenderer()
    used = tl.display(r, top=4, height=10, width=80)
    r.flush()
    assert used == 2
    rows = r.last_frame
    assert rows[4] == "  [x] 1. first"
    assert rows[5] == "> [ ] 2. second"


def test_display_empty_list_shows_hint() -> None:
    r = FakeRenderer()
    assert TaskList().display(r, top=0, height=5, width=80) == 1
    r.flush()
    assert "no tasks" in r.last_frame[0]


def test_fit_width_truncates_long_text() -> None:
    assert fit_width("abcdef", 10) == "abcdef"
    assert fit_width("abcdef", 4) == "abc…"
    assert fit_width("abcdef", 1) == "a"
