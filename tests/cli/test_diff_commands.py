"""Tests for the diff command group."""

import json
from pathlib import Path

from click.testing import CliRunner

from coda.interface.cli.core.main import main


def _invoke(args: list[str], **kwargs):
    return CliRunner().invoke(main, ["diff", *args], **kwargs)


class TestDiffShow:
    """Tests for 'coda diff show'."""

    def test_unified_output(self, workspace: Path) -> None:
        (workspace / "a.txt").write_text("line 1\nline 2\nline 3")

        result = _invoke(["--content", "a.txt", "line 1\nmodified line\nline 3", "show", "--no-color"])

        assert result.exit_code == 0, result.output
        assert "--- a.txt" in result.output
        assert "-line 2" in result.output
        assert "+modified line" in result.output
        assert "Changes: +1 -1" in result.output

    def test_side_by_side_format(self, workspace: Path) -> None:
        result = _invoke(["--content", "a.txt", "hello", "show", "--format", "side", "--no-color"])

        assert result.exit_code == 0
        assert "File: a.txt" in result.output
        assert "│ hello" in result.output

    def test_simple_format(self, workspace: Path) -> None:
        result = _invoke(["--content", "a.txt", "hello", "show", "--format", "simple"])

        assert "[CREATED]" in result.output

    def test_write_from_file(self, workspace: Path) -> None:
        (workspace / "proposed.txt").write_text("from file")

        result = _invoke(["--write", "a.txt", "proposed.txt", "show", "--no-color"])

        assert "+from file" in result.output

    def test_write_from_stdin(self, workspace: Path) -> None:
        result = _invoke(["--write", "a.txt", "-", "show", "--no-color"], input="piped\n")

        assert "+piped" in result.output

    def test_empty_changeset(self, workspace: Path) -> None:
        result = _invoke(["show"])

        assert result.exit_code == 0
        assert "No pending changes to preview" in result.output

    def test_delete_of_missing_file_fails(self, workspace: Path) -> None:
        result = _invoke(["--delete", "missing.txt", "show"])

        assert result.exit_code != 0
        assert "missing.txt" in str(result.exception)

    def test_context_option(self, workspace: Path) -> None:
        (workspace / "n.txt").write_text("\n".join(str(i) for i in range(1, 11)))
        new = "\n".join(str(i) for i in range(1, 10)) + "\nten"

        result = _invoke(["--content", "n.txt", new, "show", "--no-color", "--context", "0"])

        assert "@@ -10,1 +10,1 @@" in result.output
        assert " 9\n" not in result.output


class TestDiffStats:
    """Tests for 'coda diff stats'."""

    def test_json(self, workspace: Path) -> None:
        (workspace / "old.txt").write_text("a\nb")

        result = _invoke(["--content", "new.txt", "x", "--delete", "old.txt", "stats", "--json"])

        data = json.loads(result.output)
        assert data["total_files"] == 2
        assert data["files_created"] == 1
        assert data["files_deleted"] == 1
        assert data["total_additions"] == 1
        assert data["total_deletions"] == 2

    def test_table(self, workspace: Path) -> None:
        result = _invoke(["--content", "new.txt", "x", "stats"])

        assert result.exit_code == 0
        assert "new.txt" in result.output
        assert "1 file (+1 -0)" in result.output

    def test_empty(self, workspace: Path) -> None:
        result = _invoke(["stats"])

        assert result.exit_code == 0
        assert "No pending changes" in result.output


class TestDiffSave:
    """Tests for 'coda diff save'."""

    def test_saves_plain_text(self, workspace: Path) -> None:
        result = _invoke(["--content", "a.txt", "hi", "save", "out/p.diff"])

        assert result.exit_code == 0
        saved = (workspace / "out" / "p.diff").read_text()
        assert "+hi" in saved
        assert "\x1b[" not in saved


class TestDiffApply:
    """Tests for 'coda diff apply'."""

    def test_apply_with_yes(self, workspace: Path) -> None:
        (workspace / "gone.txt").write_text("x")

        result = _invoke(["--content", "a.txt", "hello", "--delete", "gone.txt", "apply", "--yes"])

        assert result.exit_code == 0, result.output
        assert (workspace / "a.txt").read_text() == "hello"
        assert not (workspace / "gone.txt").exists()
        assert "Applied 2/2" in result.output

    def test_confirmation_declined(self, workspace: Path) -> None:
        result = _invoke(["--content", "a.txt", "hello", "apply"], input="n\n")

        assert result.exit_code == 0
        assert not (workspace / "a.txt").exists()

    def test_confirmation_accepted(self, workspace: Path) -> None:
        result = _invoke(["--content", "a.txt", "hello", "apply"], input="y\n")

        assert result.exit_code == 0
        assert (workspace / "a.txt").read_text() == "hello"

    def test_failure_sets_exit_code(self, workspace: Path) -> None:
        (workspace / "blocker").write_text("a file, not a directory")

        result = _invoke(["--content", "blocker/a.txt", "x", "--content", "b.txt", "y", "apply", "-y"])

        assert result.exit_code == 1
        assert (workspace / "b.txt").read_text() == "y"
        assert "Applied 1/2" in result.output

    def test_empty(self, workspace: Path) -> None:
        result = _invoke(["apply", "--yes"])

        assert result.exit_code == 0
        assert "No pending changes to apply" in result.output


class TestDiffDiscard:
    """Tests for 'coda diff discard'."""

    def test_discard_leaves_disk_alone(self, workspace: Path) -> None:
        (workspace / "a.txt").write_text("keep")

        result = _invoke(["--content", "a.txt", "replace", "discard", "--yes"])

        assert result.exit_code == 0
        assert "Discarded 1 change(s)" in result.output
        assert (workspace / "a.txt").read_text() == "keep"

    def test_empty(self, workspace: Path) -> None:
        result = _invoke(["discard"])

        assert result.exit_code == 0
        assert "No pending changes to discard" in result.output


class TestDiffTool:
    """Tests for 'coda diff tool'."""

    def test_empty_changeset_skips_tool_lookup(self, workspace: Path) -> None:
        result = _invoke(["tool", "no-such-diff-tool-xyz"])

        assert result.exit_code == 0
        assert "No pending changes" in result.output

    def test_missing_tool(self, workspace: Path) -> None:
        result = _invoke(["--content", "a.txt", "x", "tool", "no-such-diff-tool-xyz"])

        assert result.exit_code != 0
        assert "no-such-diff-tool-xyz" in str(result.exception)


class TestDiffReview:
    """Tests for 'coda diff review'."""

    def test_apply_skip_discard(self, workspace: Path) -> None:
        result = _invoke(
            [
                "--content", "a.txt", "A",
                "--content", "b.txt", "B",
                "--content", "c.txt", "C",
                "review", "--format", "simple",
            ],
            input="a\ns\nd\n",
        )

        assert result.exit_code == 0, result.output
        assert (workspace / "a.txt").read_text() == "A"
        assert not (workspace / "b.txt").exists()
        assert not (workspace / "c.txt").exists()
        assert "1 change(s) applied" in result.output
        assert "1 change(s) discarded" in result.output
        assert "1 change(s) skipped" in result.output

    def test_quit_stops_early(self, workspace: Path) -> None:
        result = _invoke(
            ["--content", "a.txt", "A", "--content", "b.txt", "B", "review"],
            input="q\n",
        )

        assert result.exit_code == 0
        assert not (workspace / "a.txt").exists()
        assert "2 change(s) skipped" in result.output

    def test_empty(self, workspace: Path) -> None:
        result = _invoke(["review"])

        assert result.exit_code == 0
        assert "No pending changes to review" in result.output
