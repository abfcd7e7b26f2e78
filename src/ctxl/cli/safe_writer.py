"""Safe output writing utilities for the ctxl CLI.

This module provides a writing interface that handles
signals and interruptions gracefully.
"""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from ctxl.cli.signal_handler import signal_handler


class SafeWriter:
    """Signal-aware writer for a file path or an already open file descriptor.

    Output is encoded as UTF-8 regardless of the locale, since the generated
    context routinely contains box-drawing characters and non-ASCII file content.

    Attributes:
        file: Either a file path or file descriptor for output.
        fd: The actual file descriptor being written to.
    """

    def __init__(self, file: Union[int, str, os.PathLike]):
        self.file = file
        self._closed = False

        if isinstance(file, int):
            self.fd = file
            self._file_obj = None
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("wb")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Write data, stopping early when an interrupting signal was received.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received, or the pipe is broken.
            OSError: If an I/O error occurs during writing.
            ValueError: If attempting to write to a closed writer.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.interrupted():
            raise BrokenPipeError()

        view = memoryview(data.encode("utf-8"))
        try:
            # os.write may write fewer bytes than requested for large payloads
            while view:
                written = os.write(self.fd, view)
                view = view[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise

    def close(self) -> None:
        """Close the file if it was opened by this writer. Broken pipe errors on close are ignored."""
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close resources, giving priority to an exception raised in the with block."""
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise
