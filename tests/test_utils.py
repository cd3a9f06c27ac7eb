from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

import pytest

from inkpdf import utils
from inkpdf.exceptions import InkPdfError, ResourceError
from inkpdf.utils import atomic_output, ensure_path, get_logger


def test_ensure_path_resolves(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert ensure_path("out.pdf") == tmp_path.resolve() / "out.pdf"


def test_get_logger_adds_single_handler() -> None:
    logger = get_logger("inkpdf.tests.logger")
    again = get_logger("inkpdf.tests.logger")

    assert logger is again
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_atomic_output_replaces_destination(tmp_path: Path) -> None:
    destination = tmp_path / "nested" / "result.pdf"

    with atomic_output(destination) as handle:
        handle.write(b"payload")
        assert not destination.exists()

    assert destination.read_bytes() == b"payload"
    assert [entry.name for entry in destination.parent.iterdir()] == ["result.pdf"]


def test_atomic_output_keeps_existing_file_on_error(tmp_path: Path) -> None:
    destination = tmp_path / "result.pdf"
    destination.write_bytes(b"previous")

    with pytest.raises(InkPdfError):
        with atomic_output(destination) as handle:
            handle.write(b"partial")
            raise InkPdfError("boom")

    assert destination.read_bytes() == b"previous"
    assert [entry.name for entry in tmp_path.iterdir()] == ["result.pdf"]


def test_atomic_output_new_file_follows_umask(tmp_path: Path) -> None:
    destination = tmp_path / "result.pdf"
    previous = os.umask(0o022)
    try:
        with atomic_output(destination) as handle:
            handle.write(b"payload")
    finally:
        os.umask(previous)

    assert stat.S_IMODE(destination.stat().st_mode) == 0o644


def test_atomic_output_keeps_mode_of_replaced_file(tmp_path: Path) -> None:
    destination = tmp_path / "result.pdf"
    destination.write_bytes(b"previous")
    destination.chmod(0o640)

    with atomic_output(destination) as handle:
        handle.write(b"payload")

    assert destination.read_bytes() == b"payload"
    assert stat.S_IMODE(destination.stat().st_mode) == 0o640


def test_atomic_output_staging_allocation_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_space(*args, **kwargs):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(utils.tempfile, "mkstemp", _no_space)
    destination = tmp_path / "result.pdf"
    destination.write_bytes(b"previous")

    with pytest.raises(ResourceError):
        with atomic_output(destination) as handle:
            handle.write(b"payload")

    assert destination.read_bytes() == b"previous"
    assert [entry.name for entry in tmp_path.iterdir()] == ["result.pdf"]


def test_atomic_output_replace_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _denied(src, dst):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(utils.os, "replace", _denied)
    destination = tmp_path / "result.pdf"
    destination.write_bytes(b"previous")

    with pytest.raises(ResourceError):
        with atomic_output(destination) as handle:
            handle.write(b"payload")

    assert destination.read_bytes() == b"previous"
    assert [entry.name for entry in tmp_path.iterdir()] == ["result.pdf"]
