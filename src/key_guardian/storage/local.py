# Storage client over a local or mounted shared directory.
from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Iterator

import structlog

from ..paths import default_local_store_dir
from ..utils.errors import ConfigurationError

logger = structlog.get_logger(__name__)


class LocalStorage:
    """Filesystem-backed :class:`~key_guardian.storage.base.StorageClient`

    Store paths such as ``/key_guardian/crypto/kek`` are mapped below
    ``base_dir``. Records are written ``0o600`` and published with a hard
    link so that concurrent creators cannot both win.
    """

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self.base_dir = Path(base_dir) if base_dir else default_local_store_dir()

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    @contextlib.contextmanager
    def open(self, path: str) -> Iterator[BinaryIO]:
        with self._resolve(path).open("rb") as handle:
            yield handle

    @contextlib.contextmanager
    def create(self, path: str, *, replication: int | None = None) -> Iterator[BinaryIO]:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except FileExistsError as exc:
            # Only the publish step may signal a lost creation race
            raise NotADirectoryError(f"A parent of {path} exists and is not a directory") from exc
        if replication is not None:
            # A single local directory has no replication factor to raise
            logger.debug("storage.local.replication_ignored", path=path, replication=replication)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                yield handle
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_name, 0o600)
            os.link(tmp_name, target)
        finally:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)

    def _resolve(self, path: str) -> Path:
        store_path = PurePosixPath(path)
        if any(part == ".." for part in store_path.parts):
            raise ConfigurationError(f"Path traversal is not allowed: {path}")
        relative = store_path.relative_to(store_path.anchor) if store_path.is_absolute() else store_path
        return self.base_dir.joinpath(*relative.parts)


__all__ = ["LocalStorage"]
