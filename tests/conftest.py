from __future__ import annotations

import io
import json
import sys
import zipfile
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from inkpdf.archive.lines import encode_lines  # noqa: E402
from inkpdf.model import BrushColor, BrushType, Layer, Line, Point, StrokeData  # noqa: E402

DOC_ID = "0f3a5b2c-1111-4222-8333-944455556666"


class RecordingSurface:
    """Surface double that records every drawing call."""

    def __init__(self, width: float = 445.0, height: float = 594.0) -> None:
        self.size = (width, height)
        self.calls: list[tuple] = []
        self.draw_count = 0

    def __getattr__(self, name: str) -> Callable[..., None]:
        if name.startswith("_"):
            raise AttributeError(name)

        def _record(*args: object) -> None:
            self.calls.append((name, *args))
            if name in {"stroke", "show_text"}:
                self.draw_count += 1

        return _record

    def finish(self) -> bytes:
        self.calls.append(("finish",))
        return b"%PDF-recorded"

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]


def make_line(
    points: Iterable[tuple[float, float]],
    *,
    brush_type: BrushType | int = BrushType.FINELINER_V5,
    color: BrushColor | int = BrushColor.BLACK,
    size: float = 2.0,
) -> Line:
    return Line(
        brush_type=brush_type,
        brush_color=color,
        brush_size=size,
        points=tuple(Point(x, y) for x, y in points),
    )


def make_strokes(*lines: Line) -> StrokeData:
    return StrokeData(layers=(Layer(lines=tuple(lines)),))


def pdf_bytes(pages: int = 1, width: float = 612, height: float = 792, password: Optional[str] = None) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=width, height=height)
    if password is not None:
        writer.encrypt(user_password=password, owner_password="owner-secret")
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def recording_surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture()
def archive_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(
        pages: Sequence[Optional[StrokeData]],
        *,
        payload: Optional[bytes] = None,
        file_type: Optional[str] = None,
        filename: str = "document.zip",
        page_ids: Optional[Sequence[str]] = None,
    ) -> Path:
        if page_ids is None:
            page_ids = [f"page-{index}" for index in range(len(pages))]
        if file_type is None:
            file_type = "pdf" if payload is not None else "notebook"
        content = {"fileType": file_type, "pages": list(page_ids), "pageCount": len(pages)}

        path = tmp_path / filename
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr(f"{DOC_ID}.content", json.dumps(content))
            for page_id, data in zip(page_ids, pages):
                if data is not None:
                    archive.writestr(f"{DOC_ID}/{page_id}.rm", encode_lines(data))
            if payload is not None:
                ext = "epub" if file_type == "epub" else "pdf"
                archive.writestr(f"{DOC_ID}.{ext}", payload)
        return path

    return _create


@pytest.fixture()
def sample_strokes() -> StrokeData:
    return make_strokes(
        make_line([(100, 100), (400, 300), (700, 350)], size=3.0),
        make_line([(200, 800), (900, 805)], brush_type=BrushType.HIGHLIGHTER_V5),
    )
