from __future__ import annotations

"""
Atomic single-document store.

The whole marketplace state is one JSON object. Every mutation goes through
``transact``: the document is read, handed to a callback as a private working
copy and, only if the callback returns normally, written back in full.

Durability:
- Atomic write: temp file + fsync + os.replace + directory fsync
- Rolling backups (.bak1, .bak2, ...) of the previously committed document
- Load fallback: primary -> bak1 -> bak2 -> ...

Isolation:
- One lock per document path serializes ``load`` and ``transact`` across
  every store instance on that file in the process; acquisition is
  bounded and raises ``Busy`` instead of waiting forever.
"""

import contextlib
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, TypeVar, Union

from ..errors import Busy, StorageFailure
from .seed import COLLECTIONS, default_document

log = logging.getLogger(__name__)

JsonDict = Dict[str, Any]
PathLike = Union[str, Path]
T = TypeVar("T")

DEFAULT_LOCK_TIMEOUT_SEC = 5.0

# One lock per resolved document path, shared by every store instance in the
# process that points at that file.
_PATH_LOCKS: Dict[Path, threading.Lock] = {}
_PATH_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _PATH_LOCKS_GUARD:
        lock = _PATH_LOCKS.get(key)
        if lock is None:
            lock = _PATH_LOCKS[key] = threading.Lock()
        return lock


def _ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def _fsync_dir(dir_path: Path) -> None:
    # Not supported on every platform; the rename itself is still atomic.
    try:
        fd = os.open(str(dir_path), os.O_DIRECTORY)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)
    except (OSError, AttributeError):
        pass


def _json_dumps(obj: JsonDict) -> bytes:
    return json.dumps(obj, ensure_ascii=False, indent=2).encode("utf-8")


def atomic_write_bytes(path: Path, data: bytes) -> None:
    _ensure_dir(path.parent)

    fd, tmp_name = tempfile.mkstemp(prefix=path.name + ".", suffix=".tmp", dir=str(path.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        os.replace(str(tmp_path), str(path))
        _fsync_dir(path.parent)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def read_json(path: Path) -> Optional[JsonDict]:
    if not path.exists():
        return None
    try:
        obj = json.loads(path.read_bytes().decode("utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        log.warning("unreadable document %s: %s", path, exc)
        return None
    return obj if isinstance(obj, dict) else None


def _normalize(doc: JsonDict) -> JsonDict:
    """Every collection is present and is a list."""
    for name in COLLECTIONS:
        if not isinstance(doc.get(name), list):
            doc[name] = []
    return doc


class AtomicDocumentStore:
    """
    JSON document store with an explicit transaction boundary.

    ``transact(fn)`` is the only way to change state. ``fn`` receives the
    working copy, mutates it in place and returns whatever the caller needs;
    raising from ``fn`` aborts the transaction with nothing written.
    """

    def __init__(
        self,
        path: PathLike = "data/db.json",
        *,
        keep_backups: int = 2,
        lock_timeout_sec: float = DEFAULT_LOCK_TIMEOUT_SEC,
        seed: Optional[Callable[[], JsonDict]] = None,
    ) -> None:
        self.path = Path(path)
        self.keep_backups = int(keep_backups)
        self.lock_timeout_sec = float(lock_timeout_sec)
        self._seed = seed or default_document
        self._lock = _lock_for(self.path)

    def backup_path(self, i: int) -> Path:
        return self.path.with_suffix(self.path.suffix + f".bak{i}")

    def exists(self) -> bool:
        return self.path.exists()

    # ---------------------------
    # Locking
    # ---------------------------
    @contextlib.contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self.lock_timeout_sec):
            log.warning("store lock not acquired within %.2fs: %s", self.lock_timeout_sec, self.path)
            raise Busy()
        try:
            yield
        finally:
            self._lock.release()

    # ---------------------------
    # Read: primary -> backups -> seed
    # ---------------------------
    def _read_committed(self) -> JsonDict:
        obj = read_json(self.path)
        if obj is not None:
            return _normalize(obj)

        for i in range(1, self.keep_backups + 1):
            obj = read_json(self.backup_path(i))
            if obj is not None:
                log.warning("primary document unusable, recovered from %s", self.backup_path(i))
                return _normalize(obj)

        if self.path.exists():
            raise StorageFailure(f"Document {self.path} is corrupt and no backup is usable")

        doc = _normalize(self._seed())
        self._write(doc)
        log.info("seeded new document at %s", self.path)
        return doc

    # ---------------------------
    # Write: rotate backups + atomic write
    # ---------------------------
    def _rotate_backups(self) -> None:
        if self.keep_backups <= 0 or not self.path.exists():
            return

        for i in range(self.keep_backups, 1, -1):
            src = self.backup_path(i - 1)
            if src.exists():
                os.replace(str(src), str(self.backup_path(i)))

        # Copy, never move, so the primary is always present.
        atomic_write_bytes(self.backup_path(1), self.path.read_bytes())

    def _write(self, doc: JsonDict) -> None:
        data = _json_dumps(doc)
        try:
            self._rotate_backups()
            atomic_write_bytes(self.path, data)
        except OSError as exc:
            log.exception("document write failed: %s", self.path)
            raise StorageFailure(f"Could not persist document: {exc}") from exc

    # ---------------------------
    # Public API
    # ---------------------------
    def load(self) -> JsonDict:
        with self._locked():
            return self._read_committed()

    def transact(self, fn: Callable[[JsonDict], T]) -> T:
        with self._locked():
            working = self._read_committed()
            result = fn(working)
            self._write(working)
            return result
