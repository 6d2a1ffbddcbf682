"""Local, editable copy of a single remote object."""

import hashlib
import logging
import os
import shutil
import tempfile
import time
import uuid
from contextlib import closing
from enum import Enum
from pathlib import Path

from .backends.base import Backend

log = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class LocalState(str, Enum):
    """State of the local copy relative to a previously recorded fingerprint."""

    ABSENT = "absent"
    UNCHANGED = "unchanged"
    CHANGED = "changed"


class RemoteFile:
    """Mirrors one remote object into a private temporary file.

    Typical use:
    1. ``fetch()`` downloads the object (if it exists) to ``local_path``
    2. ``fingerprint()`` records the current content
    3. the caller edits or deletes ``local_path`` by any means
    4. ``fingerprint()`` again; if it differs, ``reconcile()`` uploads the
       file, or deletes the remote object if the local file is gone
    5. ``cleanup()`` removes the temporary directory

    The file on disk is the only local representation; nothing is cached in
    memory. Cleanup is never implicit: callers must call ``cleanup()``,
    including when an earlier step raised.

    Calling ``reconcile()`` before ``fetch()`` has created a local file will
    delete the remote object, since a missing local file means "deleted".

    Instances are not thread-safe. Use one instance per concurrent user.
    """

    def __init__(
        self,
        backend: Backend,
        work_dir: str | os.PathLike | None = None,
        temp_root: str | os.PathLike | None = None,
    ):
        self._backend = backend
        if work_dir is None:
            work_dir = _temporary_directory(temp_root)
        self.work_dir = Path(work_dir)

    @property
    def backend(self) -> Backend:
        return self._backend

    @property
    def local_path(self) -> Path:
        """Path of the local file the remote object was or will be downloaded to."""
        return self.work_dir / self._backend.suggested_filename()

    def fetch(self) -> bool:
        """Download the remote object into ``local_path``.

        The work directory is created first, whether or not the object
        exists, so that the caller always has somewhere to create the file.

        Returns:
            True if the remote object existed and was written locally, False
            if it does not exist (no local file is created).
        """
        self.work_dir.mkdir(mode=0o700, parents=True, exist_ok=True)

        result = self._backend.fetch()
        with closing(result.body) as body:
            if not result.exists:
                log.debug("Remote object absent; nothing written to %s", self.local_path)
                return False

            fd = os.open(self.local_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "wb") as f:
                shutil.copyfileobj(body, f, _CHUNK_SIZE)

        log.debug("Fetched remote object to %s", self.local_path)
        return True

    def reconcile(self) -> None:
        """Push the local state to the remote.

        If the local file exists its bytes replace the remote object.
        Otherwise the remote object is deleted, whether or not ``fetch()``
        ever found it.
        """
        path = self.local_path
        if not path.exists():
            log.debug("%s is absent; removing remote object", path)
            self._backend.remove()
            return

        with open(path, "rb") as f:
            self._backend.store(f)
        log.debug("Uploaded %s", path)

    def fingerprint(self) -> str:
        """Return the hex SHA-1 of the local file, or "" if it doesn't exist.

        The empty string never equals a real digest, so "absent" and
        "present with any content" always compare unequal.
        """
        path = self.local_path
        if not path.exists():
            return ""

        h = hashlib.sha1()
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                h.update(chunk)
        return h.hexdigest()

    def state(self, baseline: str) -> LocalState:
        """Compare the local file against a fingerprint taken earlier."""
        current = self.fingerprint()
        if not current:
            return LocalState.ABSENT
        if current == baseline:
            return LocalState.UNCHANGED
        return LocalState.CHANGED

    def reconcile_if_changed(self, baseline: str) -> bool:
        """Call ``reconcile()`` unless the local file still matches *baseline*.

        A file that was fetched and then deleted differs from its baseline, so
        the remote object is removed. A file that never existed and still
        doesn't (baseline "") is left alone.

        Returns:
            True if ``reconcile()`` ran.
        """
        if self.fingerprint() == baseline:
            log.debug("%s unchanged; skipping reconcile", self.local_path)
            return False
        self.reconcile()
        return True

    def cleanup(self) -> None:
        """Delete the work directory and everything in it. Safe to call twice."""
        try:
            shutil.rmtree(self.work_dir)
        except FileNotFoundError:
            return
        log.debug("Removed %s", self.work_dir)


def _temporary_directory(temp_root: str | os.PathLike | None = None) -> Path:
    root = Path(temp_root) if temp_root is not None else Path(tempfile.gettempdir())
    return root / f"{time.time_ns()}-{uuid.uuid4().hex}"
