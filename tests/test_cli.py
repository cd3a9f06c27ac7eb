from __future__ import annotations

import json
import tempfile
import zipfile
from pathlib import Path

import pytest
from click.testing import CliRunner
from pypdf import PdfReader

from inkpdf import cli as cli_module
from inkpdf.cli import cli

from conftest import DOC_ID, pdf_bytes


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def test_export_command(runner: CliRunner, archive_factory, sample_strokes, tmp_path: Path) -> None:
    archive = archive_factory([None, sample_strokes])
    output = tmp_path / "out.pdf"

    result = runner.invoke(cli, ["export", str(archive), str(output), "--all-pages"])

    assert result.exit_code == 0, result.output
    assert "Exported annotations" in result.output
    assert len(PdfReader(str(output)).pages) == 2


def test_export_command_reports_errors(
    runner: CliRunner, archive_factory, sample_strokes, tmp_path: Path
) -> None:
    archive = archive_factory([sample_strokes], payload=b"broken")
    output = tmp_path / "out.pdf"

    result = runner.invoke(cli, ["export", str(archive), str(output)])

    assert result.exit_code == 1
    assert "Error" in result.output
    assert not output.exists()


def test_export_command_with_disabled_backend(
    runner: CliRunner, archive_factory, sample_strokes, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("INKPDF_RENDER_BACKEND", "disabled")
    archive = archive_factory([sample_strokes])

    result = runner.invoke(cli, ["export", str(archive), str(tmp_path / "out.pdf")])

    assert result.exit_code == 1
    assert "INKPDF_RENDER_BACKEND" in result.output


def test_inspect_archive(runner: CliRunner, archive_factory, sample_strokes) -> None:
    archive = archive_factory([sample_strokes, None, None], payload=pdf_bytes(pages=3))

    result = runner.invoke(cli, ["inspect", str(archive)])

    assert result.exit_code == 0, result.output
    assert DOC_ID in result.output
    assert "Annotated pages" in result.output


def test_inspect_archive_lists_templates(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "templated.zip"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr(f"{DOC_ID}.content", json.dumps({"fileType": "notebook", "pageCount": 3, "lastOpenedPage": 2}))
        archive.writestr(f"{DOC_ID}.pagedata", "Blank\nP Lines medium\nBlank\n")

    result = runner.invoke(cli, ["inspect", str(path)])

    assert result.exit_code == 0, result.output
    assert "Blank, P Lines medium" in result.output
    assert "Last opened page" in result.output


def test_inspect_pdf(runner: CliRunner, tmp_path: Path) -> None:
    source = tmp_path / "background.pdf"
    source.write_bytes(pdf_bytes(pages=4))

    result = runner.invoke(cli, ["inspect", str(source)])

    assert result.exit_code == 0, result.output
    assert "Number of Pages" in result.output
    assert "4" in result.output


def test_inspect_rejects_garbage(runner: CliRunner, tmp_path: Path) -> None:
    source = tmp_path / "broken.pdf"
    source.write_bytes(b"garbage")

    result = runner.invoke(cli, ["inspect", str(source)])

    assert result.exit_code == 1


def test_pack_command(runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    source = tmp_path / "paper.pdf"
    source.write_bytes(pdf_bytes())

    result = runner.invoke(cli, ["pack", str(source), "--id", DOC_ID, "--no-thumbnails"])

    assert result.exit_code == 0, result.output
    assert f"Packed document {DOC_ID}" in result.output
    (packed,) = tmp_path.glob("inkpdf-*.zip")
    with zipfile.ZipFile(packed) as archive:
        assert f"{DOC_ID}.pdf" in archive.namelist()


def test_pack_command_with_thumbnails(
    runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    created: list[Path] = []

    def fake_create(doc_id, source, *, thumbnails=False):
        created.append(Path(source))
        path = tmp_path / f"{doc_id}.zip"
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr(f"{doc_id}.content", "{}")
        assert thumbnails is True
        return path

    monkeypatch.setattr(cli_module, "create_zip_document", fake_create)
    source = tmp_path / "paper.pdf"
    source.write_bytes(pdf_bytes())

    result = runner.invoke(cli, ["pack", str(source), "--thumbnails"])

    assert result.exit_code == 0, result.output
    assert created == [source]


def test_thumbnail_command(runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "make_thumbnail", lambda data: b"jpeg")
    source = tmp_path / "paper.pdf"
    source.write_bytes(pdf_bytes())
    output = tmp_path / "cover.jpg"

    result = runner.invoke(cli, ["thumbnail", str(source), str(output)])

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == b"jpeg"


def test_version_option(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output
