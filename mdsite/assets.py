"""Static asset helpers: stylesheet output, image copying, and image probing."""

from __future__ import annotations

import hashlib
import logging
import shutil
from importlib import resources
from pathlib import Path

from PIL import Image

from ._constants import CSS_FILE_NAME, IMAGE_DIR

logger = logging.getLogger(__name__)


def base_stylesheet() -> str:
    """Return the packaged base stylesheet."""
    return resources.files("mdsite").joinpath("static", CSS_FILE_NAME).read_text(
        encoding="utf-8"
    )


def build_stylesheet(highlight_css: str) -> str:
    """Concatenate the base stylesheet with the syntax-highlighting rules."""
    return f"{base_stylesheet().rstrip()}\n\n{highlight_css.strip()}\n"


def stylesheet_version(css: str) -> str:
    """Return a short content hash used to bust caches of the stylesheet URL."""
    return hashlib.sha256(css.encode("utf-8")).hexdigest()[:12]


def write_stylesheet(output_dir: Path, css: str) -> Path:
    """Write ``css`` to ``<output_dir>/app.css`` and return the path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / CSS_FILE_NAME
    path.write_text(css, encoding="utf-8")
    return path


def copy_image_dir(
    source_dir: Path, output_dir: Path, image_dir: str = IMAGE_DIR
) -> Path | None:
    """Copy ``<source_dir>/<image_dir>`` into ``output_dir`` byte for byte.

    Returns
    -------
    Path | None
        Destination directory, or ``None`` when the source has no image
        directory.
    """
    src = source_dir / image_dir
    if not src.is_dir():
        logger.debug("no image directory at %s", src)
        return None
    dest = output_dir / image_dir
    shutil.copytree(src, dest, dirs_exist_ok=True)
    return dest


def probe_image_size(path: Path) -> tuple[int, int]:
    """Return the ``(width, height)`` of the raster image at ``path``.

    Raises
    ------
    OSError
        If the file is missing, unreadable, or not a recognised image format
        (``PIL.UnidentifiedImageError`` is an ``OSError``).
    ValueError
        If Pillow refuses to open the image as a decompression bomb.
    """
    try:
        with Image.open(path) as image:
            width, height = image.size
    except Image.DecompressionBombError as exc:
        msg = f"image too large to probe: {exc}"
        raise ValueError(msg) from exc
    return width, height


__all__ = [
    "base_stylesheet",
    "build_stylesheet",
    "copy_image_dir",
    "probe_image_size",
    "stylesheet_version",
    "write_stylesheet",
]
