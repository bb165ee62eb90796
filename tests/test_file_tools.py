# tests/test_file_tools.py
from __future__ import annotations

from pathlib import Path


def test_create_file_writes_content(workdir, registry):
    result = registry.execute("createFile", {"path": "notes/todo.md", "content": "ünï"})

    assert result.success
    assert result.data["size"] == len("ünï".encode("utf-8"))
    assert (workdir / "notes" / "todo.md").read_text(encoding="utf-8") == "ünï"


def test_create_file_never_overwrites(workdir, registry):
    assert registry.execute("createFile", {"path": "a.txt", "content": "first"}).success

    second = registry.execute("createFile", {"path": "a.txt", "content": "second"})

    assert not second.success
    assert second.error_kind == "ExecutionError"
    assert "File already exists" in second.error
    assert (workdir / "a.txt").read_text() == "first"


def test_create_file_defaults_to_empty_content(workdir, registry):
    result = registry.execute("createFile", {"path": "empty.txt"})
    assert result.success
    assert result.data["size"] == 0


def test_read_file_missing(workdir, registry):
    result = registry.execute("readFile", {"path": "nope.txt"})
    assert not result.success
    assert "File does not exist" in result.error


def test_read_file_on_directory(workdir, registry):
    (workdir / "sub").mkdir()
    result = registry.execute("readFile", {"path": "sub"})
    assert "Path is not a file" in result.error


def test_edit_file_keeps_backup(workdir, registry):
    (workdir / "cfg.ini").write_text("old")

    result = registry.execute("editFile", {"path": "cfg.ini", "content": "new"})

    assert result.success
    backup = Path(result.data["backup_path"])
    assert backup.name.startswith("cfg.ini.backup.")
    assert backup.read_text() == "old"
    assert (workdir / "cfg.ini").read_text() == "new"


def test_edit_file_without_backup(workdir, registry):
    (workdir / "cfg.ini").write_text("old")

    result = registry.execute("editFile", {"path": "cfg.ini", "content": "new", "backup": False})

    assert result.success
    assert result.data["backup_path"] is None
    assert sorted(p.name for p in workdir.iterdir()) == ["cfg.ini"]


def test_edit_file_creates_missing_file(workdir, registry):
    result = registry.execute("editFile", {"path": "fresh.txt", "content": "x"})
    assert result.success
    assert result.data["backup_path"] is None
    assert (workdir / "fresh.txt").read_text() == "x"


def test_delete_missing_file_touches_nothing(workdir, registry):
    (workdir / "keep.txt").write_text("keep")

    result = registry.execute("deleteFile", {"path": "missing.txt"})

    assert not result.success
    assert result.error_kind == "ExecutionError"
    assert (workdir / "keep.txt").read_text() == "keep"


def test_delete_file(workdir, registry):
    (workdir / "gone.txt").write_text("bye")
    result = registry.execute("deleteFile", {"path": "gone.txt"})
    assert result.success
    assert not (workdir / "gone.txt").exists()


def test_list_dir(workdir, registry):
    (workdir / "b.txt").write_text("12345")
    (workdir / "a_dir").mkdir()

    result = registry.execute("listDir", {"path": "."})

    assert result.success
    items = result.data["items"]
    assert [i["name"] for i in items] == ["a_dir", "b.txt"]
    assert items[0]["type"] == "directory"
    assert items[1]["type"] == "file"
    assert items[1]["size"] == 5


def test_list_dir_on_file(workdir, registry):
    (workdir / "f.txt").write_text("")
    result = registry.execute("listDir", {"path": "f.txt"})
    assert "Path is not a directory" in result.error


def test_jail_blocks_escaping_paths(tmp_path, monkeypatch, registry):
    jail = tmp_path / "jail"
    jail.mkdir()
    (tmp_path / "secret.txt").write_text("s3cret")
    monkeypatch.chdir(jail)
    monkeypatch.setenv("TOOLS_JAIL_ROOT", str(jail))

    result = registry.execute("readFile", {"path": "../secret.txt"})

    assert not result.success
    assert result.error_kind == "SecurityError"


def test_jail_allows_inside_paths(tmp_path, monkeypatch, registry):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TOOLS_JAIL_ROOT", str(tmp_path))

    assert registry.execute("createFile", {"path": "inside/ok.txt", "content": "ok"}).success
