"""Source image discovery and lazy loading."""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Union

import numpy as np

from ...common.exceptions import TimeLapseFusionDirectoryException
from .image import ImageUtils

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = frozenset({".ppm"})


def list_source_images(
    directory: Union[str, Path], extensions: Iterable[str] = SOURCE_EXTENSIONS
) -> list[Path]:
    """List source images in a directory, sorted by file name.

    Extensions are matched case-insensitively.

    Raises:
        TimeLapseFusionDirectoryException: If the directory cannot be read
    """
    directory = Path(directory)
    wanted = {ext.lower() for ext in extensions}

    try:
        paths = [
            p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in wanted
        ]
    except OSError as e:
        raise TimeLapseFusionDirectoryException(
            f"Failed to list source directory {directory}: {e}"
        ) from e

    return sorted(paths, key=lambda p: p.name)


def iter_source_images(paths: Iterable[Path]) -> Iterator[np.ndarray]:
    """Load images one at a time, in order.

    A read failure propagates and ends the sequence; frames are never skipped.
    """
    for path in paths:
        logger.info(f"Processing: {path}")
        yield ImageUtils.load_image(path)
