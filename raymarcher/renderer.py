"""Background writer that appends raw frames to a file."""

from __future__ import annotations

import queue
import threading
from pathlib import Path
from types import TracebackType
from typing import Optional, Union

from .errors import RayMarcherError, fail

_STOP = object()


class FrameWriter:
    """Writes fixed-size raw frames to ``path`` from a worker thread.

    Frames are queued by :meth:`submit`; :meth:`close` waits until every
    queued frame has been written.
    """

    def __init__(self, path: Union[str, Path], frame_size: int) -> None:
        if frame_size <= 0:
            raise ValueError("Frame size must be positive.")
        self.path = Path(path)
        self.frame_size = frame_size
        self._queue: queue.Queue = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._closed = False
        self._error: Optional[OSError] = None

    def start(self) -> None:
        """Open the output file and start the worker thread."""
        if self._thread is not None:
            raise RayMarcherError("The frame writer is already running.")
        if self._closed:
            raise RayMarcherError("The frame writer is closed.")
        try:
            handle = open(self.path, "wb")
        except OSError:
            fail("Failed to open output file for raw frames.")
            return
        self._thread = threading.Thread(target=self._work, args=(handle,), daemon=True)
        self._thread.start()

    def _work(self, handle) -> None:
        with handle:
            while True:
                frame = self._queue.get()
                if frame is _STOP:
                    break
                if self._error is not None:
                    continue
                try:
                    handle.write(frame)
                except OSError as exc:
                    self._error = exc

    def submit(self, frame: Union[bytes, bytearray, memoryview]) -> None:
        """Queue one frame; only its first ``frame_size`` bytes are written."""
        if self._closed:
            raise RayMarcherError("Cannot submit frames to a closed frame writer.")
        data = bytes(frame)
        if len(data) < self.frame_size:
            raise ValueError(
                f"Frame has {len(data)} bytes, expected at least {self.frame_size}."
            )
        self._queue.put(data[: self.frame_size])

    def close(self) -> None:
        """Write every queued frame, then stop the worker and close the file."""
        if self._closed:
            return
        self._closed = True
        self._queue.put(_STOP)
        if self._thread is not None:
            self._thread.join()
        if self._error is not None:
            raise RayMarcherError(f"Failed to write frames: {self._error}") from self._error

    def __enter__(self) -> "FrameWriter":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()