"""
Binary store for uploaded receipt images.

Files live flat under one root directory, keyed by the upload's basename.
Existing files are never overwritten: a taken name gets a ``-1``, ``-2``, ...
suffix before the extension.  Creation is exclusive so two concurrent uploads
with the same name cannot clobber each other.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath, PureWindowsPath

logger = logging.getLogger(__name__)

MAX_RENAME_ATTEMPTS = 10_000


def safe_basename(filename: str) -> str:
    # Strip both separator styles; browsers on Windows may send full paths.
    name = PurePosixPath(PureWindowsPath(filename).name).name
    if name in ("", ".", ".."):
        return "upload"
    return name


class BlobStore:
    def __init__(self, root: str | os.PathLike):
        self.root = Path(root)

    def save(self, filename: str, content: bytes) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        name = safe_basename(filename)
        stem, suffix = os.path.splitext(name)

        for attempt in range(MAX_RENAME_ATTEMPTS):
            candidate = name if attempt == 0 else f"{stem}-{attempt}{suffix}"
            path = self.root / candidate
            try:
                fh = open(path, "xb")
            except FileExistsError:
                continue
            try:
                with fh:
                    fh.write(content)
            except OSError:
                # Don't leave a truncated file behind
                path.unlink(missing_ok=True)
                raise
            logger.info("Saved upload %s (%d bytes)", path, len(content))
            return path

        raise FileExistsError(f"No free name for upload {name!r} in {self.root}")

    def delete(self, path: str | os.PathLike) -> None:
        Path(path).unlink(missing_ok=True)
        logger.info("Removed upload %s", path)
