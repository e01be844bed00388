from __future__ import annotations
import contextlib
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterator, Union

from filelock import FileLock, Timeout

from .errors import LockTimeoutError

logger = logging.getLogger("phrase_catalog")

PathLike = Union[str, "os.PathLike[str]"]


def ensure_dir(directory: PathLike) -> Path:
    d = Path(directory)
    d.mkdir(parents=True, exist_ok=True)
    return d


class FileWriter:
    # Locked writes to one text file; whole-file writes go through a temp file and os.replace.
    def __init__(self, path: PathLike, *, lock_timeout: float = 10.0) -> None:
        self.path = Path(path)
        self.lock_timeout = lock_timeout
        self._lock = FileLock(str(self.lock_path), timeout=lock_timeout)

    @property
    def lock_path(self) -> Path:
        return self.path.with_name(self.path.name + ".lock")

    @contextlib.contextmanager
    def locked(self) -> Iterator[None]:
        # Re-entrant within one thread, so writes can nest inside a caller's lock.
        ensure_dir(self.path.parent)
        try:
            self._lock.acquire()
        except Timeout:
            raise LockTimeoutError(self.path, self.lock_timeout) from None
        try:
            yield
        finally:
            self._lock.release()

    def exists(self) -> bool:
        return self.path.is_file()

    def read_all(self) -> str:
        return self.path.read_bytes().decode("utf-8")

    def create(self, content: str = "") -> None:
        with self.locked():
            if self.path.exists():
                raise FileExistsError(f"File '{self.path}' already exists.")
            self._replace(content)
        logger.debug("create -> %s (%d chars)", self.path, len(content))

    def overwrite(self, content: str) -> None:
        with self.locked():
            self._replace(content)
        logger.debug("overwrite -> %s (%d chars)", self.path, len(content))

    def append(self, content: str) -> None:
        with self.locked():
            with self.path.open("ab") as f:
                f.write(content.encode("utf-8"))
        logger.debug("append -> %s (%d chars)", self.path, len(content))

    def prepend(self, content: str) -> None:
        with self.locked():
            current = self.read_all() if self.path.exists() else ""
            self._replace(content + current)
        logger.debug("prepend -> %s (%d chars)", self.path, len(content))

    def _replace(self, content: str) -> None:
        # Caller holds the lock.
        mode = stat.S_IMODE(self.path.stat().st_mode) if self.path.exists() else 0o644
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content.encode("utf-8"))
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp, mode)
            os.replace(tmp, self.path)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp)
            raise
