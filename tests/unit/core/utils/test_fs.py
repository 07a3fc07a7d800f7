"""Unit tests for core/utils/fs.py"""

from mdvault.core.utils.fs import atomic_write, discover_files


def test_discover_files_single(tmp_path):
    """discover_files returns a list with one file when given a file path."""
    f = tmp_path / "doc.md"
    f.write_text("# Hello")
    assert discover_files(f) == [f]


def test_discover_files_skips_other_extensions(tmp_path):
    (tmp_path / "notes.txt").write_text("text")
    assert discover_files(tmp_path) == []


def test_discover_files_recursive_sorted(tmp_path):
    (tmp_path / "b.md").write_text("b")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "a.md").write_text("a")
    (tmp_path / "A.MD").write_text("upper")
    assert discover_files(tmp_path) == sorted([tmp_path / "b.md", tmp_path / "sub" / "a.md", tmp_path / "A.MD"])


def test_discover_files_skips_hidden(tmp_path):
    (tmp_path / ".obsidian").mkdir()
    (tmp_path / ".obsidian" / "workspace.md").write_text("x")
    (tmp_path / ".draft.md").write_text("x")
    (tmp_path / "note.md").write_text("x")
    assert discover_files(tmp_path) == [tmp_path / "note.md"]


def test_discover_files_custom_extensions(tmp_path):
    (tmp_path / "a.markdown").write_text("x")
    (tmp_path / "b.md").write_text("x")
    assert discover_files(tmp_path, [".markdown"]) == [tmp_path / "a.markdown"]


def test_atomic_write_replaces_content(tmp_path):
    f = tmp_path / "note.md"
    f.write_text("old")
    atomic_write(f, "new\n")
    assert f.read_text() == "new\n"
    assert [p.name for p in tmp_path.iterdir()] == ["note.md"]
