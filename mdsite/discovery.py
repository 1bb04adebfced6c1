"""Find the markdown documents of a source tree."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ._constants import DEFAULT_SUFFIX
from .errors import DocumentReadError, FileNameError

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s")


def discover_documents(root: Path, suffix: str = DEFAULT_SUFFIX) -> list[Path]:
    """Return every file below ``root`` ending in ``suffix``, sorted.

    Parameters
    ----------
    root : Path
        Source directory to walk recursively.
    suffix : str, optional
        File name suffix selecting documents, ``.md`` by default.

    Returns
    -------
    list[Path]
        Sorted document paths; directories are never returned.

    Raises
    ------
    DocumentReadError
        If ``root`` is not a directory.
    FileNameError
        If a document path below ``root`` contains whitespace.
    """
    if not root.is_dir():
        raise DocumentReadError(root, "source directory does not exist")
    documents = sorted(
        path for path in root.rglob(f"*{suffix}") if path.is_file()
    )
    for path in documents:
        if WHITESPACE_PATTERN.search(path.relative_to(root).as_posix()):
            msg = f"File name must not contain whitespace: '{path}'"
            raise FileNameError(msg)
    logger.info("discovered %d documents under %s", len(documents), root)
    return documents


__all__ = ["discover_documents"]
