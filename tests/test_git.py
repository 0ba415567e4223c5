"""Tests for rfcindex.git module."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from rfcindex.git.runner import GitResult, run_git
from rfcindex.git.source import SourceRepository, number_from_filename
from rfcindex.lib.errors import MetadataIOError, MetadataNotFound, ParseError


class TestRunGit:
    """Test run_git function."""

    @patch("rfcindex.git.runner.subprocess.run")
    def test_success(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=0, stdout="ok\n", stderr="")
        result = run_git(["status"], tmp_path)

        assert result.success
        assert result.stdout == "ok\n"
        assert mock_run.call_args[0][0] == ["git", "-C", str(tmp_path), "status"]

    @patch("rfcindex.git.runner.subprocess.run")
    def test_failure(self, mock_run, tmp_path):
        mock_run.return_value = MagicMock(returncode=128, stdout="", stderr="fatal")
        result = run_git(["pull"], tmp_path)
        assert not result.success
        assert result.stderr == "fatal"

    @patch("rfcindex.git.runner.subprocess.run")
    def test_timeout(self, mock_run, tmp_path):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="git", timeout=5)
        result = run_git(["pull"], tmp_path, timeout=5)
        assert result.timed_out
        assert not result.success
        assert "5s" in result.stderr

    @patch("rfcindex.git.runner.subprocess.run")
    def test_git_missing(self, mock_run, tmp_path):
        mock_run.side_effect = FileNotFoundError()
        result = run_git(["status"], tmp_path)
        assert not result.success


class TestNumberFromFilename:

    def test_valid(self):
        assert number_from_filename("0050-foo.md") == 50
        assert number_from_filename("1234-bar.md") == 1234

    @pytest.mark.parametrize("name", ["readme.md", "12-x.md", "abcd-x.md", ""])
    def test_invalid(self, name):
        with pytest.raises(ParseError):
            number_from_filename(name)


class TestListTrackedDocuments:

    def test_reads_markdown_sorted(self, tmp_path):
        text = tmp_path / "text"
        text.mkdir()
        (text / "0100-b.md").write_text("# B")
        (text / "0050-a.md").write_text("# A")
        (text / "notes.txt").write_text("ignored")

        docs = SourceRepository(tmp_path, "url").list_tracked_documents()

        assert [d.number for d in docs] == [50, 100]
        assert docs[0].filename == "0050-a.md"
        assert docs[0].text == "# A"

    def test_missing_text_dir(self, tmp_path):
        with pytest.raises(MetadataNotFound):
            SourceRepository(tmp_path, "url").list_tracked_documents()

    def test_bad_filename(self, tmp_path):
        text = tmp_path / "text"
        text.mkdir()
        (text / "README.md").write_text("")
        with pytest.raises(ParseError):
            SourceRepository(tmp_path, "url").list_tracked_documents()


class TestSync:

    @patch("rfcindex.git.source.run_git")
    def test_clones_then_pulls(self, mock_git, tmp_path):
        mock_git.return_value = GitResult(0, "", "")
        work = tmp_path / "work"
        SourceRepository(work, "https://example.com/rfcs.git", branch="main").sync()

        calls = [c[0][0] for c in mock_git.call_args_list]
        assert calls == [
            ["clone", "https://example.com/rfcs.git", "."],
            ["pull", "origin", "main"],
        ]
        assert work.is_dir()

    @patch("rfcindex.git.source.run_git")
    def test_existing_clone_only_pulls(self, mock_git, tmp_path):
        mock_git.return_value = GitResult(0, "", "")
        (tmp_path / ".git").mkdir()
        SourceRepository(tmp_path, "url").sync()

        assert [c[0][0] for c in mock_git.call_args_list] == [["pull", "origin", "master"]]

    @patch("rfcindex.git.source.run_git")
    def test_pull_failure(self, mock_git, tmp_path):
        mock_git.return_value = GitResult(1, "", "conflict\n")
        (tmp_path / ".git").mkdir()
        with pytest.raises(MetadataIOError, match="git pull failed: conflict"):
            SourceRepository(tmp_path, "url").sync()

    @patch("rfcindex.git.source.run_git")
    def test_clone_failure_skips_pull(self, mock_git, tmp_path):
        mock_git.return_value = GitResult(128, "", "not found")
        with pytest.raises(MetadataIOError, match="git clone failed"):
            SourceRepository(tmp_path / "work", "url").sync()
        assert mock_git.call_count == 1
