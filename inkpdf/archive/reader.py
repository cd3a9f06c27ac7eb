"""Reading of zipped annotation documents."""

from __future__ import annotations

import json
import logging
import zipfile
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional

from ..exceptions import InputError
from ..model import Document, Page
from ..utils import PathLike, ensure_path
from .lines import decode_lines

LOGGER = logging.getLogger("inkpdf.archive")

PAYLOAD_TYPES = ("pdf", "epub")


@dataclass(frozen=True)
class Archive:
    """Contents of a zipped annotation document.

    Attributes:
        uuid: Document identifier taken from the ``.content`` file name.
        file_type: ``"pdf"``, ``"epub"``, ``"notebook"`` or an empty string.
        document: Pages in order, with decoded stroke data where present.
        payload: Raw bytes of the embedded PDF or EPUB, if any.
        content: The parsed ``.content`` descriptor.
    """

    uuid: str
    file_type: str
    document: Document
    payload: Optional[bytes] = None
    content: Dict[str, Any] = field(default_factory=dict)


def _find_content_name(names: List[str]) -> str:
    for name in names:
        path = PurePosixPath(name)
        if path.suffix == ".content" and len(path.parts) == 1:
            return name
    raise InputError("Archive has no .content file")


def _page_ids(content: Dict[str, Any]) -> List[str]:
    pages = content.get("pages")
    if isinstance(pages, list) and pages:
        return [str(page_id) for page_id in pages]

    c_pages = content.get("cPages")
    if isinstance(c_pages, dict) and isinstance(c_pages.get("pages"), list):
        return [
            str(entry["id"])
            for entry in c_pages["pages"]
            if isinstance(entry, dict) and "id" in entry and "deleted" not in entry
        ]
    return []


def _declared_page_count(content: Dict[str, Any], content_name: str) -> int:
    value = content.get("pageCount") or 0
    if isinstance(value, bool):
        raise InputError(f"Invalid pageCount in {content_name}: {value!r}")
    try:
        page_count = int(value)
    except (TypeError, ValueError) as exc:
        raise InputError(f"Invalid pageCount in {content_name}: {value!r}") from exc
    if page_count < 0:
        raise InputError(f"Invalid pageCount in {content_name}: {value!r}")
    return page_count


def _page_templates(archive: zipfile.ZipFile, uuid: str) -> List[str]:
    name = f"{uuid}.pagedata"
    if name not in archive.namelist():
        return []
    return archive.read(name).decode("utf-8", errors="replace").splitlines()


def read_archive(path: PathLike) -> Archive:
    """Read the annotation document stored in the ZIP file at *path*."""

    archive_path = ensure_path(path)
    LOGGER.debug("Reading archive %s", archive_path)
    try:
        with zipfile.ZipFile(archive_path) as archive:
            return _read(archive)
    except FileNotFoundError as exc:
        raise InputError(f"Archive not found: {archive_path}") from exc
    except zipfile.BadZipFile as exc:
        LOGGER.error("Invalid archive %s: %s", archive_path, exc)
        raise InputError(f"Not a valid archive: {archive_path}") from exc
    except OSError as exc:
        LOGGER.error("Failed to read archive %s: %s", archive_path, exc)
        raise InputError(f"Unable to read archive: {archive_path}") from exc


def _read(archive: zipfile.ZipFile) -> Archive:
    names = archive.namelist()
    content_name = _find_content_name(names)
    uuid = PurePosixPath(content_name).stem

    try:
        content = json.loads(archive.read(content_name) or b"{}")
    except ValueError as exc:
        raise InputError(f"Invalid content file: {content_name}") from exc
    if not isinstance(content, dict):
        raise InputError(f"Invalid content file: {content_name}")

    file_type = str(content.get("fileType", ""))
    payload = None
    for ext in PAYLOAD_TYPES:
        payload_name = f"{uuid}.{ext}"
        if payload_name in names:
            payload = archive.read(payload_name)
            if not file_type:
                file_type = ext
            break

    page_ids = _page_ids(content)
    page_count = len(page_ids) or _declared_page_count(content, content_name)
    if not page_count:
        page_count = sum(
            1 for name in names if name.startswith(f"{uuid}/") and name.endswith(".rm")
        )

    templates = _page_templates(archive, uuid)
    pages = []
    for index in range(page_count):
        candidates = []
        if index < len(page_ids):
            candidates.append(f"{uuid}/{page_ids[index]}.rm")
        candidates.append(f"{uuid}/{index}.rm")

        data = None
        for candidate in candidates:
            if candidate in names:
                LOGGER.debug("Decoding page %d from %s", index, candidate)
                data = decode_lines(archive.read(candidate))
                break

        template = templates[index] if index < len(templates) else None
        pages.append(Page(data=data, template=template))

    LOGGER.info(
        "Read archive %s: type=%s, pages=%d, payload=%s",
        uuid,
        file_type or "notebook",
        len(pages),
        payload is not None,
    )
    return Archive(
        uuid=uuid,
        file_type=file_type,
        document=Document(pages=tuple(pages)),
        payload=payload,
        content=content,
    )


def get_id_from_zip(path: PathLike) -> str:
    """Return the document UUID of the archive at *path*."""

    return read_archive(path).uuid


__all__ = ["Archive", "read_archive", "get_id_from_zip"]
