"""
Tests for the upload file manager.
"""

import io
import os
import re

import pytest

from course_eval_api.exceptions import FileTooLarge
from course_eval_api.managers import FileManager


@pytest.fixture
def file_manager(tmp_path):
    return FileManager(str(tmp_path / "uploads"))


def test_generated_name_keeps_extension(file_manager):
    name = file_manager.generate_filename("Course Evals.PDF")
    assert re.fullmatch(r"\d{13}-[0-9a-f]{12}\.pdf", name)


def test_generated_names_are_unique(file_manager):
    names = {file_manager.generate_filename("a.pdf") for _ in range(50)}
    assert len(names) == 50


def test_generated_name_without_extension(file_manager):
    assert "." not in file_manager.generate_filename("evaluations")


def test_save_stream_writes_file(file_manager):
    filename, path, size = file_manager.save_stream(io.BytesIO(b"%PDF-data"), "eval.pdf", 1024)

    assert os.path.dirname(path) == file_manager.upload_dir
    assert os.path.basename(path) == filename
    assert size == 9
    assert file_manager.read_bytes(path) == b"%PDF-data"
    assert file_manager.is_readable(path)


def test_save_stream_over_limit_removes_partial_file(file_manager):
    with pytest.raises(FileTooLarge):
        file_manager.save_stream(io.BytesIO(b"x" * 200_000), "big.pdf", 100_000)

    assert os.listdir(file_manager.upload_dir) == []


def test_cleanup(file_manager):
    _, path, _ = file_manager.save_stream(io.BytesIO(b"data"), "eval.pdf", 1024)

    assert file_manager.cleanup_temp_file(path) is True
    assert not os.path.exists(path)
    assert file_manager.cleanup_temp_file(path) is False
    assert file_manager.cleanup_temp_file(None) is False


def test_is_readable_rejects_missing(file_manager, tmp_path):
    assert not file_manager.is_readable(str(tmp_path / "missing.pdf"))
    assert not file_manager.is_readable(None)
