"""Packing of source documents into zipped annotation documents."""

from __future__ import annotations

import json
import logging
import tempfile
import time
import uuid
import zipfile
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from ..config import load_settings
from ..exceptions import InputError, ResourceError, ThumbnailError
from ..utils import PathLike, ensure_path
from .thumbnails import make_thumbnail

LOGGER = logging.getLogger("inkpdf.archive")

SUPPORTED_SOURCES = ("pdf", "epub", "rm", "zip")


def build_content(file_type: str, page_ids: Sequence[str]) -> Dict[str, Any]:
    """Return a ``.content`` descriptor for a freshly packed document."""

    return {
        "dummyDocument": False,
        "extraMetadata": {
            "LastPen": "Finelinerv2",
            "LastTool": "Finelinerv2",
            "LastFinelinerv2Size": "1",
        },
        "fileType": file_type,
        "pageCount": 0,
        "lastOpenedPage": 0,
        "lineHeight": -1,
        "margins": 180,
        "textScale": 1,
        "transform": {
            "m11": 1, "m12": 0, "m13": 0,
            "m21": 0, "m22": 1, "m23": 0,
            "m31": 0, "m32": 0, "m33": 1,
        },
        "pages": list(page_ids),
    }


def _source_extension(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext not in SUPPORTED_SOURCES:
        raise InputError(f"Unsupported source document: {path.name}")
    return ext


def create_zip_document(
    doc_id: str,
    src_path: PathLike,
    *,
    thumbnails: Optional[bool] = None,
) -> Path:
    """Pack *src_path* into a new archive and return the archive path.

    ``.zip`` sources are returned unchanged. ``.rm`` sources become a
    single-page notebook. When *thumbnails* is set, PDFs get a first-page
    thumbnail; a failed thumbnail is logged and skipped. ``None`` defers to
    the ``INKPDF_THUMBNAILS`` setting.
    """

    if thumbnails is None:
        thumbnails = load_settings().thumbnails
    source = ensure_path(src_path)
    ext = _source_extension(source)
    if ext == "zip":
        return source

    try:
        document = source.read_bytes()
    except OSError as exc:
        LOGGER.error("Failed to open source document %s: %s", source, exc)
        raise InputError(f"Unable to read source document: {source}") from exc

    if ext == "rm":
        page_id = str(uuid.uuid4())
        document_name = f"{doc_id}/{page_id}.rm"
        file_type = "notebook"
        pages = [page_id]
    else:
        document_name = f"{doc_id}.{ext}"
        file_type = ext
        pages = [""]

    zip_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(prefix="inkpdf-", suffix=".zip", delete=False) as handle:
            zip_path = Path(handle.name)
            with zipfile.ZipFile(handle, "w") as archive:
                archive.writestr(document_name, document)

                if ext == "pdf" and thumbnails:
                    try:
                        archive.writestr(f"{doc_id}.thumbnails/0.jpg", make_thumbnail(document))
                    except ThumbnailError as exc:
                        LOGGER.warning("Cannot generate thumbnail for %s: %s", source, exc)

                archive.writestr(f"{doc_id}.pagedata", b"")
                archive.writestr(f"{doc_id}.content", json.dumps(build_content(file_type, pages)))
    except OSError as exc:
        if zip_path is not None:
            zip_path.unlink(missing_ok=True)
        LOGGER.error("Failed to create archive for %s: %s", source, exc)
        raise ResourceError(f"Unable to create archive for {source}") from exc

    LOGGER.info("Packed %s into %s", source, zip_path)
    return zip_path


def create_zip_directory(doc_id: str) -> Path:
    """Create an archive describing an empty collection."""

    try:
        with tempfile.NamedTemporaryFile(prefix="inkpdf-", suffix=".zip", delete=False) as handle:
            zip_path = Path(handle.name)
            with zipfile.ZipFile(handle, "w") as archive:
                archive.writestr(f"{doc_id}.content", "{}")
    except OSError as exc:
        LOGGER.error("Failed to create directory archive: %s", exc)
        raise ResourceError("Unable to create directory archive") from exc
    return zip_path


def create_content(
    doc_id: str,
    ext: str,
    directory: PathLike,
    page_ids: Sequence[str],
) -> Path:
    """Write ``<doc_id>.content`` into *directory*; empty *ext* writes ``{}``."""

    path = ensure_path(directory) / f"{doc_id}.content"
    content: Any = build_content(ext, page_ids) if ext else {}
    path.write_text(json.dumps(content), encoding="utf-8")
    return path


def unix_timestamp() -> str:
    return str(time.time_ns() // 1_000_000)


def create_metadata(
    doc_id: str,
    name: str,
    parent: str,
    collection_type: str,
    directory: PathLike,
    *,
    last_modified: Optional[str] = None,
) -> Path:
    """Write ``<doc_id>.metadata`` into *directory*."""

    path = ensure_path(directory) / f"{doc_id}.metadata"
    metadata = {
        "visibleName": name,
        "version": 0,
        "type": collection_type,
        "parent": parent,
        "synced": True,
        "lastModified": last_modified or unix_timestamp(),
    }
    path.write_text(json.dumps(metadata), encoding="utf-8")
    return path


__all__ = [
    "build_content",
    "create_zip_document",
    "create_zip_directory",
    "create_content",
    "create_metadata",
]
