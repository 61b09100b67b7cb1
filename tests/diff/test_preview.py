"""Tests for the DiffPreviewer session."""

from pathlib import Path

import pytest

from coda.diff import NO_PENDING_CHANGES, DiffPreviewer, RenderOptions
from coda.diff.types import ChangeKind
from coda.foundation.config import DiffConfig
from coda.foundation.errors import CodaError, ErrorCode


class TestScenarios:
    """End-to-end stats for typical edits."""

    @pytest.mark.parametrize(
        ("old", "new", "additions", "deletions"),
        [
            ("line 1\nline 2", "line 1\nline 2\nline 3\nline 4", 2, 0),
            ("line 1\nline 2\nline 3", "line 1", 0, 2),
            ("line 1\nline 2\nline 3", "line 1\nmodified line\nline 3", 1, 1),
        ],
    )
    def test_stats(
        self,
        previewer: DiffPreviewer,
        workspace: Path,
        old: str,
        new: str,
        additions: int,
        deletions: int,
    ) -> None:
        (workspace / "f.txt").write_text(old)

        previewer.add_file_change("f.txt", new)
        stats = previewer.get_stats()

        assert (stats.total_additions, stats.total_deletions) == (additions, deletions)
        assert stats.files_modified == 1

    def test_deleting_missing_file(self, previewer: DiffPreviewer, workspace: Path) -> None:
        previewer.add_file_change("keep.txt", "x")
        before = previewer.get_pending_files()

        with pytest.raises(CodaError) as exc_info:
            previewer.add_file_deletion("nope.txt")

        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND
        assert "nope.txt" in exc_info.value.message
        assert previewer.get_pending_files() == before

    def test_partial_apply_failure(
        self,
        previewer: DiffPreviewer,
        workspace: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        from coda.foundation.utils import files

        file_a = workspace / "a.txt"
        file_b = workspace / "b.txt"
        real_write = files.write_text

        def guarded_write(path: Path, content: str) -> None:
            if path == file_a:
                raise PermissionError("Permission denied")
            real_write(path, content)

        previewer.add_file_change(file_a, "A")
        previewer.add_file_change(file_b, "B")
        monkeypatch.setattr(files, "write_text", guarded_write)

        result = previewer.apply_changes()

        assert result.succeeded == [file_b]
        assert [(f.path, f.error) for f in result.failed] == [(file_a, "Permission denied")]
        assert result.total_changes == 2
        assert not previewer.has_pending_changes()
        assert file_b.read_text() == "B"
        assert not file_a.exists()


class TestPreview:
    """Tests for rendering through the session."""

    def test_empty_preview_sentinel(self, previewer: DiffPreviewer) -> None:
        assert previewer.get_preview() == NO_PENDING_CHANGES

    def test_preview_follows_insertion_order(self, previewer: DiffPreviewer) -> None:
        previewer.add_file_change("z.txt", "z")
        previewer.add_file_change("a.txt", "a")

        text = previewer.get_preview(RenderOptions(colorize=False, unified_format=False))

        assert text.index("File: z.txt") < text.index("File: a.txt")

    def test_reregistering_updates_preview(self, previewer: DiffPreviewer) -> None:
        previewer.add_file_change("a.txt", "first")
        previewer.add_file_change("a.txt", "second")

        text = previewer.get_preview(RenderOptions(colorize=False))

        assert "+second" in text
        assert "+first" not in text

    def test_file_preview(self, previewer: DiffPreviewer) -> None:
        previewer.add_file_change("a.txt", "a")
        previewer.add_file_change("b.txt", "b")

        text = previewer.get_file_preview("b.txt", RenderOptions(colorize=False))

        assert "+++ b.txt (new file)" in text
        assert "a.txt" not in text

    def test_file_preview_of_unknown_path(self, previewer: DiffPreviewer) -> None:
        assert previewer.get_file_preview("none.txt") == NO_PENDING_CHANGES

    def test_default_options_come_from_config(self, workspace: Path, tmp_path: Path) -> None:
        previewer = DiffPreviewer(
            DiffConfig(colorize=False, format="simple"),
            snapshot_dir=tmp_path / "snap",
        )
        previewer.add_file_change("a.txt", "a")

        assert previewer.get_preview().split("\n")[:2] == ["File: a.txt", "[CREATED]"]

    def test_context_lines_override(self, previewer: DiffPreviewer, workspace: Path) -> None:
        (workspace / "n.txt").write_text("\n".join(str(i) for i in range(1, 11)))
        previewer.add_file_change("n.txt", "\n".join(str(i) for i in range(1, 10)) + "\nten")

        previewer.set_context_lines(0)

        assert previewer.get_diff("n.txt").hunks[0].header == "@@ -10,1 +10,1 @@"

    def test_save_preview_is_plain(self, previewer: DiffPreviewer, workspace: Path) -> None:
        previewer.add_file_change("a.txt", "hello")

        target = previewer.save_preview("out/preview.diff", RenderOptions(colorize=True))

        assert target == workspace / "out" / "preview.diff"
        saved = target.read_text()
        assert "\x1b[" not in saved
        assert saved == previewer.get_preview(RenderOptions(colorize=False))

    def test_save_empty_preview(self, previewer: DiffPreviewer, workspace: Path) -> None:
        target = previewer.save_preview("empty.diff")

        assert target.read_text() == NO_PENDING_CHANGES


class TestStats:
    """Tests for get_stats."""

    def test_empty(self, previewer: DiffPreviewer) -> None:
        stats = previewer.get_stats()

        assert stats.total_files == 0
        assert stats.format() == "0 files (+0 -0)"

    def test_counts_match_file_diffs(self, previewer: DiffPreviewer, workspace: Path) -> None:
        (workspace / "m.txt").write_text("a\nb")
        (workspace / "d.txt").write_text("x\ny\nz")
        previewer.add_file_change("c.txt", "1\n2")
        previewer.add_file_change("m.txt", "a\nB")
        previewer.add_file_deletion("d.txt")

        stats = previewer.get_stats()
        diffs = previewer.get_diffs()

        assert stats.total_files == 3
        assert (stats.files_created, stats.files_modified, stats.files_deleted) == (1, 1, 1)
        assert stats.total_additions == sum(d.additions for d in diffs) == 3
        assert stats.total_deletions == sum(d.deletions for d in diffs) == 4
        assert stats.net_change == -1


class TestResolution:
    """Tests for apply/discard and the empty-changeset policy."""

    def test_apply_writes_and_clears(self, previewer: DiffPreviewer, workspace: Path) -> None:
        (workspace / "gone.txt").write_text("x")
        previewer.add_file_change("dir/new.txt", "new")
        previewer.add_file_deletion("gone.txt")

        result = previewer.apply_changes()

        assert result.ok
        assert result.total_changes == 2
        assert (workspace / "dir" / "new.txt").read_text() == "new"
        assert not (workspace / "gone.txt").exists()
        assert not previewer.has_pending_changes()
        assert previewer.get_preview() == NO_PENDING_CHANGES

    def test_apply_empty_is_noop(self, previewer: DiffPreviewer) -> None:
        result = previewer.apply_changes()

        assert result.nothing_to_do
        assert result.succeeded == []
        assert result.failed == []

    def test_apply_writes_previewed_content(self, previewer: DiffPreviewer, workspace: Path) -> None:
        target = workspace / "a.txt"
        target.write_text("v1")
        previewer.add_file_change(target, "v2")
        target.write_text("changed meanwhile")

        previewer.apply_changes()

        assert target.read_text() == "v2"

    def test_apply_selected_keeps_the_rest(self, previewer: DiffPreviewer, workspace: Path) -> None:
        previewer.add_file_change("a.txt", "a")
        previewer.add_file_change("b.txt", "b")

        result = previewer.apply_selected(["b.txt", "unknown.txt"])

        assert result.succeeded == [workspace / "b.txt"]
        assert previewer.get_pending_files() == [workspace / "a.txt"]
        assert not (workspace / "a.txt").exists()

    def test_discard_leaves_disk_alone(self, previewer: DiffPreviewer, workspace: Path) -> None:
        (workspace / "a.txt").write_text("keep")
        previewer.add_file_change("a.txt", "overwrite")

        assert previewer.discard_changes() == 1
        assert previewer.discard_changes() == 0
        assert (workspace / "a.txt").read_text() == "keep"

    def test_discard_one(self, previewer: DiffPreviewer) -> None:
        previewer.add_file_change("a.txt", "a")

        assert previewer.discard_change("a.txt")
        assert not previewer.discard_change("a.txt")
        assert previewer.get_diff("a.txt") is None

    def test_diff_tool_with_nothing_pending(self, previewer: DiffPreviewer) -> None:
        assert previewer.open_in_diff_tool("definitely-not-a-real-tool") == 0

    def test_registration_returns_diff(self, previewer: DiffPreviewer, workspace: Path) -> None:
        diff = previewer.add_file_change("a.txt", "one\ntwo")

        assert diff.kind is ChangeKind.CREATE
        assert diff.additions == 2
        assert previewer.get_change("a.txt").new_content == "one\ntwo"


class TestSnapshotDir:
    """Tests for where diff-tool snapshots go."""

    def test_default_under_config_dir(self, workspace: Path, tmp_path: Path) -> None:
        previewer = DiffPreviewer(DiffConfig())

        assert previewer.snapshot_dir == tmp_path / "config-home" / "diff-snapshots"
        assert previewer.bridge.scratch_dir == previewer.snapshot_dir / "temp"

    def test_configured_dir(self, workspace: Path, tmp_path: Path) -> None:
        previewer = DiffPreviewer(DiffConfig(snapshot_dir=str(tmp_path / "snaps")))

        assert previewer.snapshot_dir == tmp_path / "snaps"
