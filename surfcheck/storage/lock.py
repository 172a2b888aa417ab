"""Exclusive lock around a check cycle's load-evaluate-persist sequence."""

import logging
import os
from pathlib import Path
from types import TracebackType

logger = logging.getLogger(__name__)


class StateLockedError(RuntimeError):
    def __init__(self, lock_path: Path, pid: int):
        super().__init__(f"Alert state is locked by pid {pid} ({lock_path})")
        self.lock_path = lock_path
        self.pid = pid


class StateLock:
    """PID lock file next to the state file.

    A lock left behind by a dead process is treated as stale and replaced.
    """

    def __init__(self, state_path: str | Path):
        state_path = Path(state_path)
        self.path = state_path.with_name(state_path.name + ".lock")
        self._held = False

    def acquire(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        for _ in range(2):
            try:
                fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
            except FileExistsError:
                self._clear_if_stale()
                continue
            with os.fdopen(fd, "w") as f:
                f.write(str(os.getpid()))
            self._held = True
            return
        raise StateLockedError(self.path, self._read_pid() or -1)

    def release(self) -> None:
        if self._held:
            self.path.unlink(missing_ok=True)
            self._held = False

    def _read_pid(self) -> int | None:
        try:
            return int(self.path.read_text().strip())
        except (OSError, ValueError):
            return None

    def _clear_if_stale(self) -> None:
        pid = self._read_pid()
        if pid is None:
            logger.warning("Removing unreadable lock file %s", self.path)
            self.path.unlink(missing_ok=True)
            return
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            logger.warning("Removing stale lock from dead pid %d", pid)
            self.path.unlink(missing_ok=True)
            return
        except PermissionError:
            pass
        raise StateLockedError(self.path, pid)

    def __enter__(self) -> "StateLock":
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
