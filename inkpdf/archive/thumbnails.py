"""First-page thumbnails rendered through poppler's ``pdftoppm``."""

from __future__ import annotations

import io
import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

from PIL import Image

from ..exceptions import ThumbnailError

LOGGER = logging.getLogger("inkpdf.archive")

THUMBNAIL_SIZE = (280, 374)
RENDER_SCALE = 800


def _pdftoppm_available() -> str | None:
    return shutil.which("pdftoppm")


def build_pdftoppm_command(executable: str, source: Path, prefix: Path) -> list[str]:
    return [
        executable,
        "-png",
        "-singlefile",
        "-f",
        "1",
        "-l",
        "1",
        "-scale-to",
        str(RENDER_SCALE),
        str(source),
        str(prefix),
    ]


def make_thumbnail(pdf: bytes) -> bytes:
    """Render the first page of *pdf* and return it as a JPEG thumbnail."""

    executable = _pdftoppm_available()
    if not executable:
        raise ThumbnailError("pdftoppm not found. Ensure 'pdftoppm' is installed (part of poppler-utils)")

    with tempfile.TemporaryDirectory(prefix="inkpdf-thumb-") as workdir:
        source = Path(workdir) / "document.pdf"
        prefix = Path(workdir) / "page"
        try:
            source.write_bytes(pdf)
        except OSError as exc:  # pragma: no cover - IO errors vary
            raise ThumbnailError("Failed to write temporary PDF") from exc

        command = build_pdftoppm_command(executable, source, prefix)
        LOGGER.debug("Running pdftoppm command: %s", command)
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:  # pragma: no cover - OS errors vary
            LOGGER.error("Failed to execute pdftoppm: %s", exc)
            raise ThumbnailError("Failed to execute pdftoppm") from exc

        if result.returncode != 0:
            LOGGER.error("pdftoppm failed with code %s: %s", result.returncode, result.stderr)
            raise ThumbnailError(
                f"pdftoppm failed: {result.stderr.strip()}\n"
                "Ensure 'pdftoppm' is installed (part of poppler-utils)"
            )

        rendered = prefix.with_suffix(".png")
        try:
            with Image.open(rendered) as image:
                thumbnail = image.convert("RGB").resize(THUMBNAIL_SIZE, Image.Resampling.LANCZOS)
        except OSError as exc:
            raise ThumbnailError("Failed to decode rendered PNG") from exc

    output = io.BytesIO()
    thumbnail.save(output, format="JPEG")
    LOGGER.info("Rendered %dx%d thumbnail", *THUMBNAIL_SIZE)
    return output.getvalue()


__all__ = ["THUMBNAIL_SIZE", "build_pdftoppm_command", "make_thumbnail"]
