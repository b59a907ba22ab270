"""
File-backed document store.

Documents are regular files inside a root directory, addressed by
POSIX paths relative to that root (the form embed markers carry).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VaultFile:
    """Handle of a content document stored in the vault."""
    path: str          # vault-relative POSIX path, as requested
    abs_path: Path


class VaultStore:
    """
    DocumentStore over a directory tree.

    Only regular files are content documents: directories, missing paths
    and paths leading outside the root resolve to None.
    """

    def __init__(self, root: Path, *, encoding: str = "utf-8"):
        self.root = Path(root).resolve()
        self.encoding = encoding

    def resolve(self, path: str) -> Optional[VaultFile]:
        if not path or not path.strip():
            return None
        rel = PurePosixPath(path.strip().lstrip("/"))
        try:
            candidate = (self.root / Path(*rel.parts)).resolve()
            is_file = candidate.is_file()
        except (OSError, ValueError) as e:
            # e.g. embedded NUL byte, name too long
            logger.debug("Unusable document path %r: %s", path, e)
            return None
        try:
            candidate.relative_to(self.root)
        except ValueError:
            logger.debug("Path outside vault root rejected: %s", path)
            return None
        if not is_file:
            return None
        return VaultFile(path=path, abs_path=candidate)

    async def read_text(self, handle: VaultFile) -> str:
        # blocking read goes to a worker thread
        return await asyncio.to_thread(handle.abs_path.read_text, encoding=self.encoding)


__all__ = ["VaultStore", "VaultFile"]
