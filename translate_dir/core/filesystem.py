"""
Filesystem capability.

Every core component reads and writes files through a FileSystem object so
tests can substitute a failing or recording implementation.
"""

import glob
import hashlib
import os
import shutil
from pathlib import Path
from typing import List, Tuple


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def is_file(self, path: Path) -> bool:
        return Path(path).is_file()

    def is_dir(self, path: Path) -> bool:
        return Path(path).is_dir()

    def makedirs(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def read_bytes(self, path: Path) -> bytes:
        return Path(path).read_bytes()

    def write_bytes(self, path: Path, data: bytes) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def copy(self, src: Path, dst: Path) -> None:
        dst = Path(dst)
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)

    def remove(self, path: Path) -> None:
        Path(path).unlink()

    def signature(self, path: Path) -> Tuple[int, str]:
        """Return (size, sha256) of a file's content."""
        digest = hashlib.sha256()
        size = 0
        with open(path, 'rb') as f:
            for chunk in iter(lambda: f.read(65536), b''):
                size += len(chunk)
                digest.update(chunk)
        return size, digest.hexdigest()

    def glob(self, pattern: str, cwd: Path) -> List[Path]:
        """Expand a glob relative to cwd; results are absolute and sorted."""
        if os.path.isabs(pattern):
            full_pattern = pattern
        else:
            # cwd itself may contain metacharacters
            full_pattern = os.path.join(glob.escape(str(cwd)), pattern)
        return [Path(p) for p in sorted(glob.glob(full_pattern, recursive=True, include_hidden=True))]
