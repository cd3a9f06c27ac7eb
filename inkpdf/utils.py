"""Utility helpers shared by :mod:`inkpdf` modules."""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from .exceptions import ResourceError

PathLike = Union[str, Path]

LOGGER = logging.getLogger("inkpdf")


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def ensure_path(path: PathLike) -> Path:
    """Return a :class:`~pathlib.Path` instance for *path*.

    User-home references are expanded and relative paths are resolved
    against the current working directory.
    """

    return Path(path).expanduser().resolve(strict=False)


def _output_mode(destination: Path) -> int:
    try:
        return destination.stat().st_mode & 0o777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


@contextmanager
def atomic_output(path: PathLike) -> Iterator[BinaryIO]:
    """Yield a writable stream whose contents replace *path* on success.

    The data is written to a uniquely named staging file next to *path*.
    The staging file is moved over the destination only when the ``with``
    block completes; on any exception it is removed and the destination is
    left untouched. The result keeps the mode of the file it replaces, or
    gets the default mode for new files under the current umask.
    """

    destination = ensure_path(path)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, staging_name = tempfile.mkstemp(
            prefix=f".{destination.stem}-", suffix=".partial", dir=destination.parent
        )
    except OSError as exc:
        LOGGER.error("Failed to allocate staging file for %s: %s", destination, exc)
        raise ResourceError(f"Unable to create staging file for {destination}") from exc

    staging = Path(staging_name)
    LOGGER.debug("Staging output for %s in %s", destination, staging)
    try:
        with os.fdopen(fd, "wb") as handle:
            yield handle
        os.chmod(staging, _output_mode(destination))
        os.replace(staging, destination)
    except OSError as exc:
        staging.unlink(missing_ok=True)
        LOGGER.error("Failed to write %s: %s", destination, exc)
        raise ResourceError(f"Unable to write output file {destination}") from exc
    except BaseException:
        staging.unlink(missing_ok=True)
        raise


__all__ = ["PathLike", "get_logger", "ensure_path", "atomic_output"]
