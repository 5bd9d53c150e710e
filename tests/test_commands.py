# tests/test_commands.py

from __future__ import annotations

from pathlib import Path

from todo_sheets.cli.commands import CommandRegistry, add_text, registry
from todo_sheets.connectors.console_connector import ConsoleRenderer
from todo_sheets.core.state import AppState
from todo_sheets.sheets.reader import read_tasks


def _ids(state: AppState) -> list[int]:
    return [t.id for t in state.task_store.list_tasks()]


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")


def test_add_and_duplicate_messages(state) -> None:
    assert "Added task" in registry.handle(state, "/add Write report")
    assert "already exists" in add_text(state, "  write REPORT ")
    assert "empty" in add_text(state, "   ")
    assert state.task_store.count_tasks() == 1


def test_lock_blocks_remove_and_edit(state) -> None:
    add_text(state, "Write report")
    (tid,) = _ids(state)

    assert "locked" in registry.handle(state, f"/lock {tid}")
    assert "locked" in registry.handle(state, f"/rm {tid}")
    assert "locked" in registry.handle(state, f"/edit {tid}")
    assert state.text_prompt.asked == []  # prompt never opened
    assert "completed" in registry.handle(state, f"/done {tid}")

    assert "unlocked" in registry.handle(state, f"/lock {tid}")
    assert "Removed" in registry.handle(state, f"/rm {tid}")
    assert state.task_store.count_tasks() == 0


def test_edit_uses_prompt_and_clears_pending_target(state) -> None:
    add_text(state, "Alpha")
    add_text(state, "Beta")
    a, _ = _ids(state)

    state.text_prompt.replies = ["beta", "Alpha v2", None]

    assert "already exists" in registry.handle(state, f"/edit {a}")
    assert state.view.pending_edit_id is None
    assert "updated" in registry.handle(state, f"/edit {a}")
    assert state.task_store.get(a).text == "Alpha v2"
    assert "cancelled" in registry.handle(state, f"/edit {a}")
    assert state.text_prompt.asked[0] == (f"Edit task {a}", "Alpha")


def test_clear_requires_confirmation_and_resets_page(state) -> None:
    for t in ("a", "b", "c", "d", "e"):
        add_text(state, t)
    first = _ids(state)[0]
    registry.handle(state, f"/lock {first}")
    registry.handle(state, "/page 3")
    assert state.view.current_page == 3

    state.confirm_prompt.answer = False
    assert "cancelled" in registry.handle(state, "/clear")
    assert state.task_store.count_tasks() == 5

    state.confirm_prompt.answer = True
    reply = registry.handle(state, "/clear")
    assert "Removed 4" in reply
    assert [t.text for t in state.task_store.list_tasks()] == ["a"]
    assert state.view.current_page == 1
    assert len(state.confirm_prompt.asked) == 2


def test_bulk_commands_report_noop(state) -> None:
    for name in ("complete-all", "incomplete-all", "lock-all", "unlock-all"):
        assert registry.handle(state, f"/{name}") == "No tasks."
    add_text(state, "a")
    add_text(state, "b")
    assert "Marked 2" in registry.handle(state, "/complete-all")
    assert "Nothing to change" in registry.handle(state, "/complete-all")
    assert "Marked 2" in registry.handle(state, "/incomplete-all")
    assert "Nothing to change" in registry.handle(state, "/incomplete-all")
    assert "Locked 2" in registry.handle(state, "/lock-all")
    assert "Nothing to change" in registry.handle(state, "/lock-all")
    assert "Unlocked 2" in registry.handle(state, "/unlock-all")
    assert "Nothing to change" in registry.handle(state, "/unlock-all")


def test_export_and_import_commands(state, tmp_path: Path) -> None:
    assert registry.handle(state, "/export") == "Nothing to export."

    add_text(state, "Write report")
    add_text(state, "Buy milk")
    registry.handle(state, f"/done {_ids(state)[1]}")

    reply = registry.handle(state, "/export")
    target = Path(state.settings.export_dir) / "TodoList.xlsx"
    assert str(target) in reply
    rows = read_tasks(target.read_bytes(), target.name)
    assert [(r.text, r.done) for r in rows] == [("Write report", False), ("Buy milk", True)]

    # re-importing the same file adds nothing
    notes: list[str] = []
    reply = registry.handle(state, f"/import {target}", emit=notes.append)
    assert "Imported 0 new task(s); 2 duplicate(s) skipped." == reply
    assert notes and "Reading" in notes[0]

    bad = tmp_path / "bad.xlsx"
    bad.write_bytes(b"junk")
    assert "Import failed" in registry.handle(state, f"/import {bad}")
    assert state.task_store.count_tasks() == 2


def test_import_via_picker(state, tmp_path: Path) -> None:
    assert "cancelled" in registry.handle(state, "/import")
    assert state.file_picker.calls == 1

    add_text(state, "from picker")
    path = Path(registry.handle(state, f"/export {tmp_path / 'picked.xlsx'}").rsplit(" ", 1)[-1])
    registry.handle(state, f"/rm {_ids(state)[0]}")

    state.file_picker.path = path
    assert "Imported 1 new task(s)" in registry.handle(state, "/import")
    assert [t.text for t in state.task_store.list_tasks()] == ["from picker"]


def test_paging_commands(state) -> None:
    for t in ("a", "b", "c", "d", "e"):
        add_text(state, t)
    assert registry.handle(state, "/next") == "Page 2."
    assert registry.handle(state, "/page 9") == "Page 3."
    assert registry.handle(state, "/prev") == "Page 2."
    assert "Page: 2/3" in registry.handle(state, "/status")


def test_console_renderer_hides_edit_and_delete_for_locked(state) -> None:
    add_text(state, "free")
    add_text(state, "guarded")
    registry.handle(state, f"/lock {_ids(state)[1]}")

    out = ConsoleRenderer().render(state.current_page(), state.task_store.summary())
    free_line = next(line for line in out.splitlines() if "free" in line)
    guarded_line = next(line for line in out.splitlines() if "guarded" in line)
    assert "edit" in free_line and "rm" in free_line
    assert "edit" not in guarded_line.split("guarded", 1)[1]
    assert " rm" not in guarded_line
    assert "Page 1/1" in out


def test_add_command_keeps_inner_whitespace(state) -> None:
    registry.handle(state, "/add   Buy   milk  ")
    add_text(state, "Call   mom")
    assert [t.text for t in state.task_store.list_tasks()] == ["Buy   milk", "Call   mom"]
    assert registry.handle(state, "/add    ") == "Usage: /add <text>"


def test_registry_raw_args_pass_rest_of_line(state) -> None:
    reg = CommandRegistry()
    seen: list[list[str]] = []
    reg.register("say", lambda st, args: seen.append(args) or "ok", "say", aliases=["s"], raw_args=True)
    reg.register("split", lambda st, args: seen.append(args) or "ok", "split")

    reg.handle(state, "/say  hello   world ")
    reg.handle(state, "/s")
    reg.handle(state, "/split a  b")
    assert seen == [["hello   world"], [], ["a", "b"]]


def test_export_and_import_paths_with_double_spaces(state, tmp_path: Path) -> None:
    add_text(state, "spaced path")
    target = tmp_path / "my  lists" / "todo  list.xlsx"

    assert str(target) in registry.handle(state, f"/export {target}")
    assert target.exists()

    registry.handle(state, f"/rm {_ids(state)[0]}")
    assert "Imported 1 new task(s)" in registry.handle(state, f"/import {target}")


def test_export_keeps_existing_suffix_and_appends_xlsx(state, tmp_path: Path) -> None:
    add_text(state, "x")
    reply = registry.handle(state, f"/export {tmp_path / 'report.v2'}")
    assert (tmp_path / "report.v2.xlsx").exists()
    assert str(tmp_path / "report.v2.xlsx") in reply


def test_failed_export_leaves_no_temp_file(state, tmp_path: Path) -> None:
    add_text(state, "x")
    blocker = tmp_path / "out.xlsx"
    blocker.mkdir()

    assert "Export failed" in registry.handle(state, f"/export {blocker}")
    assert list(tmp_path.glob("*.tmp")) == []
    assert blocker.is_dir()


def test_export_with_control_characters(state) -> None:
    add_text(state, "ring \x07 bell")
    reply = registry.handle(state, "/export")
    assert reply.startswith("Exported 1 task(s)")

    target = Path(state.settings.export_dir) / "TodoList.xlsx"
    assert [r.text for r in read_tasks(target.read_bytes(), target.name)] == ["ring  bell"]
