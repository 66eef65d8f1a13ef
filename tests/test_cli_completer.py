"""Tests for UpzloadCompleter."""

import pytest
from pathlib import Path
from unittest.mock import patch

from prompt_toolkit.document import Document

from cli.completer import UpzloadCompleter
from cli.constants import COMMANDS


@pytest.fixture
def completer():
    return UpzloadCompleter()


@pytest.fixture
def workdir(tmp_path):
    """
    Create a working directory with a few local files.

    Returns:
        Path to the temporary working directory
    """
    (tmp_path / "notes.txt").write_text("content")
    (tmp_path / "photo.png").write_text("content")
    (tmp_path / ".secret").write_text("content")
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "report.pdf").write_text("content")
    return tmp_path


def get_completions_list(completer, text):
    """Helper to get list of completion texts from completer."""
    doc = Document(text, len(text))
    return [c.text for c in completer.get_completions(doc, None)]


class TestCommandCompletion:
    """Tests for command name completion."""

    def test_empty_input_shows_all_commands(self, completer):
        completions = get_completions_list(completer, "")
        for cmd in COMMANDS:
            assert cmd in completions

    def test_partial_command_filters(self, completer):
        completions = get_completions_list(completer, "lo")
        assert completions == ["login", "logout"]

    def test_command_completion_case_insensitive(self, completer):
        completions = get_completions_list(completer, "UP")
        assert completions == ["upload"]


class TestFileCompletion:
    """Tests for local path completion in the upload command."""

    def test_upload_shows_local_files(self, completer, workdir):
        with patch.object(Path, "cwd", return_value=workdir):
            completions = get_completions_list(completer, "upload ")

        assert completions == ["docs/", "notes.txt", "photo.png"]

    def test_hidden_files_need_dot_prefix(self, completer, workdir):
        with patch.object(Path, "cwd", return_value=workdir):
            completions = get_completions_list(completer, "upload .s")

        assert completions == [".secret"]

    def test_partial_name_filters(self, completer, workdir):
        with patch.object(Path, "cwd", return_value=workdir):
            completions = get_completions_list(completer, "upload no")

        assert completions == ["notes.txt"]

    def test_descends_into_directories(self, completer, workdir):
        with patch.object(Path, "cwd", return_value=workdir):
            completions = get_completions_list(completer, "upload docs/")

        assert completions == ["docs/report.pdf"]

    def test_already_typed_files_are_excluded(self, completer, workdir):
        with patch.object(Path, "cwd", return_value=workdir):
            completions = get_completions_list(completer, "upload notes.txt ")

        assert "notes.txt" not in completions
        assert "photo.png" in completions

    def test_missing_directory_yields_nothing(self, completer, workdir):
        with patch.object(Path, "cwd", return_value=workdir):
            completions = get_completions_list(completer, "upload nowhere/")

        assert completions == []

    def test_other_commands_get_no_file_completion(self, completer, workdir):
        with patch.object(Path, "cwd", return_value=workdir):
            assert get_completions_list(completer, "download ") == []
