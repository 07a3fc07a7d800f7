"""Unit tests for core/pipeline.py"""

from mdvault.config import Settings
from mdvault.core.pipeline import FileChange, run_archive, run_format


MESSY = "Title\n=====\ntext   \n"
TIDY = "# Title\n\ntext\n"


def test_file_change_diff_and_summary(tmp_path):
    change = FileChange(tmp_path / "n.md", "a\n", "b\n")
    assert change.ok
    assert "-a\n" in change.diff()
    assert change.summary() == {"added": 1, "deleted": 1}


def test_run_format_writes_changed_files_only(tmp_path):
    messy, tidy = tmp_path / "messy.md", tmp_path / "tidy.md"
    messy.write_text(MESSY)
    tidy.write_text(TIDY)
    results = run_format(tmp_path, Settings())
    assert [c.path for c in results] == [messy]
    assert messy.read_text() == TIDY
    assert tidy.read_text() == TIDY


def test_run_format_dry_run_leaves_files(tmp_path):
    f = tmp_path / "messy.md"
    f.write_text(MESSY)
    results = run_format(tmp_path, Settings(), dry_run=True)
    assert len(results) == 1
    assert results[0].new == TIDY
    assert f.read_text() == MESSY


def test_run_format_reports_unreadable_file(tmp_path):
    (tmp_path / "bad.md").write_bytes(b"\xff\xfe\x00bad")
    (tmp_path / "good.md").write_text(MESSY)
    results = run_format(tmp_path, Settings())
    assert [c.ok for c in results] == [False, True]
    assert "bad.md" in results[0].error
    assert (tmp_path / "good.md").read_text() == TIDY


def test_run_archive_only_tagged_files(tmp_path):
    tagged, untagged = tmp_path / "tagged.md", tmp_path / "untagged.md"
    tagged.write_text("#todo\n\n- [x] a\n")
    untagged.write_text("- [x] a\n")
    results = run_archive(tmp_path, Settings())
    assert [c.path for c in results] == [tagged]
    assert tagged.read_text() == "#todo\n\n## Archived\n\n- [x] a\n"
    assert untagged.read_text() == "- [x] a\n"


def test_run_archive_empty_tag_selects_all(tmp_path):
    f = tmp_path / "untagged.md"
    f.write_text("- [x] a\n")
    results = run_archive(tmp_path, Settings(), tag="")
    assert len(results) == 1
    assert f.read_text() == "## Archived\n\n- [x] a\n"


def test_run_archive_custom_heading(tmp_path):
    f = tmp_path / "n.md"
    f.write_text("- [x] a\n")
    run_archive(tmp_path, Settings(archive_tag="", archive_heading="Done"))
    assert f.read_text() == "## Done\n\n- [x] a\n"
